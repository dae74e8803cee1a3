import re
from typing import Callable, Iterator, Optional

from grid_editor.domain.udi import Udi
from .html import get_attribute, replace_img_tags, set_attribute, split_query

DATA_UDI_RE = re.compile(r"""data-udi\s*=\s*["'](?P<udi>[^"']+)["']""", re.IGNORECASE)

MediaUrlResolver = Callable[[Udi], Optional[str]]


class HtmlImageSourceParser:
    """
    Keeps image URLs out of stored rich text.

    Images inserted from the media library carry a ``data-udi`` attribute.
    On save their ``src`` path is removed; on load it is put back from the
    current media URL, so moving or renaming media never leaves stale links.
    """

    def __init__(self, media_url_resolver: MediaUrlResolver):
        self._media_url_resolver = media_url_resolver

    def find_udis_from_data_attributes(self, text: Optional[str]) -> Iterator[Udi]:
        if not text:
            return
        for match in DATA_UDI_RE.finditer(text):
            udi = Udi.try_parse(match.group("udi"))
            if udi is not None:
                yield udi

    def ensure_image_sources(self, text: Optional[str]) -> Optional[str]:
        if not text:
            return text

        def ensure(tag: str) -> str:
            udi = Udi.try_parse(get_attribute(tag, "data-udi"))
            if udi is None:
                return tag

            url = self._media_url_resolver(udi)
            if not url:
                return tag

            _, query = split_query(get_attribute(tag, "src") or "")
            return set_attribute(tag, "src", url + query)

        return replace_img_tags(text, ensure)

    def remove_image_sources(self, text: Optional[str]) -> Optional[str]:
        if not text:
            return text

        def remove(tag: str) -> str:
            src = get_attribute(tag, "src")
            if get_attribute(tag, "data-udi") is None or src is None:
                return tag

            _, query = split_query(src)
            return set_attribute(tag, "src", query)

        return replace_img_tags(text, remove)
