"""Attribute-level editing of <img> tags inside rich text HTML."""
import html
import re
from typing import Callable, Optional, Tuple

IMG_TAG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
TAG_RE = re.compile(r"<[^>]+>")
_TAG_END_RE = re.compile(r"\s*/?>$")


def _attribute_re(name: str) -> "re.Pattern[str]":
    return re.compile(
        r"""\s%s\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""" % re.escape(name),
        re.IGNORECASE,
    )


def replace_img_tags(text: str, replace: Callable[[str], str]) -> str:
    return IMG_TAG_RE.sub(lambda m: replace(m.group(0)), text)


def get_attribute(tag: str, name: str) -> Optional[str]:
    match = _attribute_re(name).search(tag)
    if not match:
        return None
    raw = next(group for group in match.groups() if group is not None)
    return html.unescape(raw)


def set_attribute(tag: str, name: str, value: str) -> str:
    attribute = ' %s="%s"' % (name, html.escape(value, quote=True))
    pattern = _attribute_re(name)
    if pattern.search(tag):
        return pattern.sub(lambda _: attribute, tag, count=1)

    end = _TAG_END_RE.search(tag)
    return tag[:end.start()] + attribute + tag[end.start():]


def remove_attribute(tag: str, name: str) -> str:
    return _attribute_re(name).sub("", tag, count=1)


def split_query(url: str) -> Tuple[str, str]:
    """'/media/a.jpg?width=300' -> ('/media/a.jpg', '?width=300')"""
    path, sep, query = url.partition("?")
    return path, sep + query


def strip_html(text: str) -> str:
    return html.unescape(TAG_RE.sub(" ", text)).strip()
