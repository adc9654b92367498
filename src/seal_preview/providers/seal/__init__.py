from seal_preview.providers.seal.client import SealClient
from seal_preview.providers.seal.transport import SealTransport

__all__ = ["SealClient", "SealTransport"]
