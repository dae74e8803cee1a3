import uuid

from grid_editor.domain.udi import DOCUMENT, MEDIA, Udi
from grid_editor.richtext import HtmlImageSourceParser, HtmlLocalLinkParser
from grid_editor.richtext.html import get_attribute, remove_attribute, set_attribute, strip_html

MEDIA_UDI = Udi(MEDIA, uuid.UUID("4fb2bc9d-5c0d-4d1b-8b6d-1c5f3f3bd0a2"))
DOCUMENT_UDI = Udi(DOCUMENT, uuid.UUID("0b9e2b1e-7c55-4f8e-a6e3-6f1d2c3b4a59"))


def test_udi_parse_and_format():
    text = "udi://media/4fb2bc9d5c0d4d1b8b6d1c5f3f3bd0a2"

    assert Udi.parse(text) == MEDIA_UDI
    assert str(MEDIA_UDI) == text
    assert Udi.try_parse("UDI://Media/4FB2BC9D5C0D4D1B8B6D1C5F3F3BD0A2") == MEDIA_UDI
    assert Udi.try_parse("udi://media/not-a-guid") is None
    assert Udi.try_parse(None) is None


def test_attribute_helpers_handle_quotes_and_missing_attributes():
    tag = "<img class=photo src='/a.jpg?w=2' data-src=\"/b.jpg\">"

    assert get_attribute(tag, "src") == "/a.jpg?w=2"
    assert get_attribute(tag, "class") == "photo"
    assert get_attribute(tag, "alt") is None

    tag = set_attribute(tag, "src", "/c.jpg")
    assert get_attribute(tag, "src") == "/c.jpg"
    assert get_attribute(tag, "data-src") == "/b.jpg"

    tag = set_attribute(tag, "alt", 'a "quoted" alt')
    assert get_attribute(tag, "alt") == 'a "quoted" alt'
    assert tag.endswith(">")

    assert get_attribute(remove_attribute(tag, "class"), "class") is None


def test_set_attribute_on_self_closing_tag():
    tag = set_attribute('<img src="/a.jpg" />', "data-udi", str(MEDIA_UDI))

    assert tag == f'<img src="/a.jpg" data-udi="{MEDIA_UDI}" />'


def test_remove_image_sources_keeps_query_string():
    parser = HtmlImageSourceParser(lambda udi: None)
    html = (
        f'<p><img src="/media/abc.jpg?width=300" data-udi="{MEDIA_UDI}" alt="x">'
        '<img src="/static/logo.png"></p>'
    )

    result = parser.remove_image_sources(html)

    assert result == (
        f'<p><img src="?width=300" data-udi="{MEDIA_UDI}" alt="x">'
        '<img src="/static/logo.png"></p>'
    )


def test_ensure_image_sources_resolves_current_media_url():
    parser = HtmlImageSourceParser({MEDIA_UDI: "/media/new-name.jpg"}.get)
    missing = Udi(MEDIA, uuid.uuid4())
    html = (
        f'<img src="?width=300" data-udi="{MEDIA_UDI}">'
        f'<img src="/media/gone.jpg" data-udi="{missing}">'
    )

    result = parser.ensure_image_sources(html)

    assert result == (
        f'<img src="/media/new-name.jpg?width=300" data-udi="{MEDIA_UDI}">'
        f'<img src="/media/gone.jpg" data-udi="{missing}">'
    )


def test_ensure_and_remove_pass_through_empty_values():
    parser = HtmlImageSourceParser(lambda udi: "/x.jpg")

    assert parser.ensure_image_sources(None) is None
    assert parser.remove_image_sources("") == ""


def test_find_udis():
    html = (
        f"<img data-udi='{MEDIA_UDI}'><img data-udi=\"broken\">"
        f'<a href="{{localLink:{DOCUMENT_UDI}}}">link</a>'
    )

    assert list(HtmlImageSourceParser(lambda udi: None).find_udis_from_data_attributes(html)) == [MEDIA_UDI]
    assert list(HtmlLocalLinkParser().find_udis_from_local_links(html)) == [DOCUMENT_UDI]
    assert list(HtmlLocalLinkParser().find_udis_from_local_links(None)) == []


def test_strip_html():
    assert strip_html("<p>Fish &amp; chips</p>") == "Fish & chips"
