from seal_preview.interfaces.transport import IPageRequest, IPreviewRequest, ISealTransport

__all__ = ["IPageRequest", "IPreviewRequest", "ISealTransport"]
