"""Static site generator for a curated catalog of PenguinMod/TurboWarp extensions."""
