"""Table keyed font patches, IFT patch URL templates and IFTB config conversion."""

__version__ = "0.1.0"