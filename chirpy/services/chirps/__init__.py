from .dto import ChirpCreateIn, ChirpListIn, ChirpOut
from .service import ChirpService

__all__ = ["ChirpCreateIn", "ChirpListIn", "ChirpOut", "ChirpService"]
