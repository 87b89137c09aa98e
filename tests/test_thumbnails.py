"""
Unit tests for ThumbnailLoader and ThumbnailSlot.

Image bytes are generated with Pillow; the session is mocked.
"""

import logging
from io import BytesIO
from unittest.mock import Mock

import pytest
import requests
from PIL import Image

from vidscroll.core import (
    NO_THUMBNAIL,
    CancelToken,
    DecodeError,
    Thumbnail,
    ThumbnailLoader,
    ThumbnailSlot,
    TransportError,
)

URL = "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"


def jpeg_bytes(size=(480, 360)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buf, format="JPEG")
    return buf.getvalue()


def make_session(content=None, get_error=None):
    session = Mock(spec=requests.Session)
    session.headers = {}
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        mock_response = Mock()
        mock_response.content = content
        mock_response.raise_for_status = Mock()
        session.get.return_value = mock_response
    return session


class TestFetchImage:
    """Synchronous download and decode."""

    def test_decodes_image(self, executor):
        loader = ThumbnailLoader(executor, session=make_session(jpeg_bytes()))

        img = loader.fetch_image(URL)

        assert img.size == (480, 360)

    def test_unreachable_url(self, executor):
        session = make_session(get_error=requests.ConnectionError("unreachable"))
        loader = ThumbnailLoader(executor, session=session)

        with pytest.raises(TransportError):
            loader.fetch_image(URL)

    def test_not_an_image(self, executor):
        loader = ThumbnailLoader(executor, session=make_session(b"<html>404</html>"))

        with pytest.raises(DecodeError):
            loader.fetch_image(URL)

    def test_decompression_bomb_is_decode_error(self, executor, monkeypatch):
        """Oversized images are rejected as undecodable rather than escaping."""
        buf = BytesIO()
        Image.new("RGB", (200, 200)).save(buf, format="PNG")
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        loader = ThumbnailLoader(executor, session=make_session(buf.getvalue()))

        with pytest.raises(DecodeError):
            loader.fetch_image(URL)


class TestLoad:
    """Background loads delivered through dispatch."""

    def test_delivers_resized_image(self, executor, dispatch):
        loader = ThumbnailLoader(executor, dispatch=dispatch, session=make_session(jpeg_bytes()))
        on_loaded = Mock()

        loader.load(URL, on_loaded, size=(160, 90))
        on_loaded.assert_not_called()
        dispatch.flush()

        on_loaded.assert_called_once()
        assert on_loaded.call_args.args[0].size == (160, 90)

    def test_unreachable_url_keeps_placeholder(self, executor, dispatch, caplog):
        """A failed load never calls back and does not raise."""
        session = make_session(get_error=requests.ConnectionError("unreachable"))
        loader = ThumbnailLoader(executor, dispatch=dispatch, session=session)
        on_loaded = Mock()

        with caplog.at_level(logging.ERROR):
            future = loader.load(URL, on_loaded)
        dispatch.flush()

        assert future.result() is None
        on_loaded.assert_not_called()
        assert "Error loading thumbnail" in caplog.text

    def test_cancelled_before_start(self, executor, dispatch):
        session = make_session(jpeg_bytes())
        loader = ThumbnailLoader(executor, dispatch=dispatch, session=session)
        token = CancelToken()
        token.cancel()
        on_loaded = Mock()

        loader.load(URL, on_loaded, token=token)
        dispatch.flush()

        session.get.assert_not_called()
        on_loaded.assert_not_called()

    def test_cancelled_while_queued_for_ui(self, executor, dispatch):
        """Cancelling after the download but before delivery drops the image."""
        loader = ThumbnailLoader(executor, dispatch=dispatch, session=make_session(jpeg_bytes()))
        token = CancelToken()
        on_loaded = Mock()

        loader.load(URL, on_loaded, token=token)
        token.cancel()
        dispatch.flush()

        on_loaded.assert_not_called()

    def test_no_caching(self, executor):
        """Each load of the same URL issues a new request."""
        session = make_session(jpeg_bytes())
        loader = ThumbnailLoader(executor, session=session)

        loader.load(URL, Mock())
        loader.load(URL, Mock())

        assert session.get.call_count == 2

    def test_decompression_bomb_logged_during_load(self, executor, dispatch, monkeypatch, caplog):
        buf = BytesIO()
        Image.new("RGB", (200, 200)).save(buf, format="PNG")
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        loader = ThumbnailLoader(executor, dispatch=dispatch, session=make_session(buf.getvalue()))
        on_loaded = Mock()

        with caplog.at_level(logging.ERROR):
            future = loader.load(URL, on_loaded)
        dispatch.flush()

        assert future.exception() is None
        assert future.result() is None
        on_loaded.assert_not_called()
        assert "Error loading thumbnail" in caplog.text


class TestCancelToken:

    def test_starts_active(self):
        assert not CancelToken().cancelled

    def test_cancel(self):
        token = CancelToken()
        token.cancel()
        assert token.cancelled


class TestThumbnailSlot:
    """Placeholder, cancel and reload behaviour of a row's thumbnail."""

    HIGH = Thumbnail(url=URL, width=480, height=360)

    def test_absent_variant_keeps_placeholder(self):
        """A result without a high thumbnail never starts a load."""
        loader = Mock(spec=ThumbnailLoader)
        on_image = Mock()
        slot = ThumbnailSlot(NO_THUMBNAIL, loader, on_image)

        assert slot.show() is False

        assert slot.is_visible
        loader.load.assert_not_called()
        on_image.assert_not_called()
        assert not slot.has_image

    def test_show_starts_one_load(self):
        loader = Mock(spec=ThumbnailLoader)
        slot = ThumbnailSlot(self.HIGH, loader, Mock(), size=(160, 90))

        assert slot.show() is True
        assert slot.show() is False

        loader.load.assert_called_once()
        args, kwargs = loader.load.call_args
        assert args[0] == URL
        assert kwargs["size"] == (160, 90)
        assert kwargs["token"] is slot.token

    def test_hide_cancels_pending_load(self):
        loader = Mock(spec=ThumbnailLoader)
        slot = ThumbnailSlot(self.HIGH, loader, Mock())
        slot.show()
        token = slot.token

        slot.hide()

        assert token.cancelled
        assert not slot.is_visible
        assert not slot.is_loading

    def test_cancel_on_destroy(self):
        loader = Mock(spec=ThumbnailLoader)
        slot = ThumbnailSlot(self.HIGH, loader, Mock())
        slot.show()
        token = slot.token

        slot.cancel()

        assert token.cancelled

    def test_cancelled_slot_reloads_when_shown_again(self):
        loader = Mock(spec=ThumbnailLoader)
        slot = ThumbnailSlot(self.HIGH, loader, Mock())
        slot.show()
        first = slot.token
        slot.hide()

        assert slot.show() is True

        assert loader.load.call_count == 2
        assert slot.token is not first
        assert not slot.token.cancelled

    def test_loaded_image_not_fetched_again(self):
        loader = Mock(spec=ThumbnailLoader)
        on_image = Mock()
        slot = ThumbnailSlot(self.HIGH, loader, on_image)
        slot.show()
        on_loaded = loader.load.call_args.args[1]
        img = Image.new("RGB", (160, 90))

        on_loaded(img)
        slot.hide()
        assert slot.show() is False

        on_image.assert_called_once_with(img)
        assert slot.has_image
        loader.load.assert_called_once()

    def test_end_to_end_with_loader(self, executor, dispatch):
        """A real loader delivers into the slot; hiding before delivery drops it."""
        loader = ThumbnailLoader(executor, dispatch=dispatch, session=make_session(jpeg_bytes()))
        on_image = Mock()
        slot = ThumbnailSlot(self.HIGH, loader, on_image, size=(160, 90))

        slot.show()
        slot.hide()
        dispatch.flush()
        on_image.assert_not_called()

        slot.show()
        dispatch.flush()
        on_image.assert_called_once()
        assert slot.has_image
