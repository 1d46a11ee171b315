"""Raster line pipeline for inkjet printing: scaling, watermark blending, mirroring and page reversal."""

__version__ = "1.0.0"

__all__ = [
    "page",
    "geometry",
    "wbf",
    "watermark",
    "blend",
    "mirror",
    "scale",
    "reverse",
    "fetchpool",
    "pipeline",
    "raster",
]