"""Standing desk height decoding from controller serial traffic: decoders, protocol variants and a polling sensor."""

__version__ = "0.1.0"
__all__ = ["decoders", "variant", "sensor"]