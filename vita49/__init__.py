"""Build, encode and decode VRT signal data packets and their header, trailer, spectrum and threshold fields."""

__version__ = "0.0.4"

__all__ = [
    "errors",
    "packet_header",
    "trailer",
    "threshold",
    "signal_data",
    "spectrum_types",
    "spectrum",
    "payload",
    "vrt",
]