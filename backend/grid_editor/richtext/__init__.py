from .image_sources import HtmlImageSourceParser
from .local_links import HtmlLocalLinkParser
from .pasted_images import RichTextEditorPastedImages

__all__ = ["HtmlImageSourceParser", "HtmlLocalLinkParser", "RichTextEditorPastedImages"]
