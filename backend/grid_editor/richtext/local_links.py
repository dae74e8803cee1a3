import re
from typing import Iterator, Optional

from grid_editor.domain.udi import Udi

LOCAL_LINK_RE = re.compile(r"\{localLink:(?P<udi>[^}]+)\}", re.IGNORECASE)


class HtmlLocalLinkParser:
    """Finds links to other content written as ``{localLink:<udi>}``."""

    def find_udis_from_local_links(self, text: Optional[str]) -> Iterator[Udi]:
        if not text:
            return
        for match in LOCAL_LINK_RE.finditer(text):
            udi = Udi.try_parse(match.group("udi"))
            if udi is not None:
                yield udi
