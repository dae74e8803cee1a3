import uuid

import pytest
from flask_jwt_extended import create_access_token

from grid_editor import create_app
from grid_editor.domain.udi import MEDIA, Udi
from grid_editor.extensions import db
from grid_editor.models.user import User
from grid_editor.property_editors import GridPropertyEditor
from grid_editor.richtext import HtmlImageSourceParser, HtmlLocalLinkParser, RichTextEditorPastedImages

TEMP_URL = "/media/tmp/"


class FakeMedia:
    def __init__(self, key: uuid.UUID, url: str):
        self.udi = Udi(MEDIA, key)
        self.url = url


class FakeMediaService:
    """Records media creation instead of touching a database."""

    def __init__(self):
        self.calls = []
        self.urls = {}

    def create_media_from_file(self, name, parent_key, user_id, source_path):
        self.calls.append((name, parent_key, user_id, source_path))
        key = uuid.uuid4()
        media = FakeMedia(key, f"/media/{key.hex}.jpg")
        self.urls[media.udi] = media.url
        return media

    def add(self, url: str) -> Udi:
        udi = Udi(MEDIA, uuid.uuid4())
        self.urls[udi] = url
        return udi

    def get_url(self, udi):
        return self.urls.get(udi)


@pytest.fixture
def media_service():
    return FakeMediaService()


@pytest.fixture
def temp_folder(tmp_path):
    folder = tmp_path / "tmp"
    folder.mkdir(exist_ok=True)
    return folder


@pytest.fixture
def image_source_parser(media_service):
    return HtmlImageSourceParser(media_service.get_url)


@pytest.fixture
def pasted_images(media_service, temp_folder):
    return RichTextEditorPastedImages(media_service, temp_folder=str(temp_folder), temp_url=TEMP_URL)


@pytest.fixture
def grid_property_editor(image_source_parser, pasted_images):
    return GridPropertyEditor(image_source_parser, HtmlLocalLinkParser(), pasted_images)


@pytest.fixture
def value_editor(grid_property_editor):
    return grid_property_editor.get_value_editor()


@pytest.fixture
def app(tmp_path):
    upload_folder = tmp_path / "uploads"
    temp_media_folder = tmp_path / "tmp"
    temp_media_folder.mkdir(exist_ok=True)

    app = create_app("testing", {
        "UPLOAD_FOLDER": str(upload_folder),
        "TEMP_MEDIA_FOLDER": str(temp_media_folder),
        "TEMP_MEDIA_URL": TEMP_URL,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    user = User()
    user.email = "editor@example.com"
    user.set_password("s3cret-password")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def auth_headers(user):
    token = create_access_token(identity=user.id)
    return {"Authorization": f"Bearer {token}"}
