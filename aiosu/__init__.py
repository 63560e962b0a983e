"""SD card update helpers: firmware detection, colour profiles, downloads, cheats and DeepSea packs."""

__version__ = "2.23.2"
__all__ = ["cfw", "colors", "download", "cheats", "forwarder", "deepsea"]