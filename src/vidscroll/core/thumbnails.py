"""Background thumbnail fetching with cancellation."""

import logging
import threading
from concurrent.futures import Executor, Future
from io import BytesIO
from typing import Callable, Optional, Tuple

import requests
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, SearchError, TransportError
from .models import Thumbnail, ThumbnailVariant

logger = logging.getLogger(__name__)


class CancelToken:
    """Flag a pending load as no longer wanted."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ThumbnailLoader:
    """Fetches thumbnail images off the UI thread.

    Nothing is cached: every ``load`` issues a new request, even for a URL
    that was loaded before.
    """

    def __init__(self, executor: Executor, dispatch: Optional[Callable] = None,
                 session: Optional[requests.Session] = None, timeout: float = 10):
        self.executor = executor
        self.dispatch = dispatch or (lambda fn: fn())
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': 'Mozilla/5.0'})
        self.timeout = timeout

    def fetch_image(self, url: str) -> Image.Image:
        """Download and decode an image. Raises TransportError or DecodeError."""
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Thumbnail request failed: {e}") from e

        try:
            pil_img = Image.open(BytesIO(resp.content))
            pil_img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise DecodeError(f"Thumbnail is not a readable image: {e}") from e
        return pil_img

    def load(self, url: str, on_loaded: Callable[[Image.Image], None],
             size: Optional[Tuple[int, int]] = None,
             token: Optional[CancelToken] = None) -> Future:
        """Load ``url`` in the background and hand the image to ``on_loaded``.

        ``on_loaded`` runs through ``dispatch`` and is skipped entirely if the
        load fails or ``token`` is cancelled first.
        """
        return self.executor.submit(self._run, url, on_loaded, size, token)

    def _run(self, url, on_loaded, size, token) -> Optional[Image.Image]:
        if token is not None and token.cancelled:
            return None
        try:
            logger.debug(f"Loading thumbnail from: {url}")
            pil_img = self.fetch_image(url)
            if size:
                pil_img = pil_img.resize(size, Image.Resampling.LANCZOS)
        except SearchError as e:
            logger.error(f"Error loading thumbnail: {e}")
            return None
        except Exception as e:
            # Nobody reads the Future; anything unexpected is logged here
            logger.error(f"Error loading thumbnail {url}: {e}", exc_info=True)
            return None

        if token is not None and token.cancelled:
            logger.debug(f"Thumbnail load cancelled: {url}")
            return None

        def deliver(img=pil_img):
            # The row may have been hidden while the callback was queued
            if token is None or not token.cancelled:
                on_loaded(img)

        self.dispatch(deliver)
        return pil_img

    def close(self):
        self.session.close()


class ThumbnailSlot:
    """Load state of one row's thumbnail.

    The row shows a placeholder until ``on_image`` is called. Hiding the row
    cancels a pending load; showing it again starts a new one unless the
    image already arrived. An absent variant never loads.
    """

    def __init__(self, variant: ThumbnailVariant, loader: ThumbnailLoader,
                 on_image: Callable[[Image.Image], None],
                 size: Optional[Tuple[int, int]] = None):
        self.variant = variant
        self.loader = loader
        self.on_image = on_image
        self.size = size

        self.is_visible = False
        self.has_image = False
        self.token: Optional[CancelToken] = None

    @property
    def is_loading(self) -> bool:
        return self.token is not None

    def show(self) -> bool:
        """Mark visible; returns True when a new load was started."""
        self.is_visible = True
        if self.has_image or self.is_loading:
            return False
        if not isinstance(self.variant, Thumbnail):
            # No such variant: keep the placeholder
            return False
        self.token = CancelToken()
        self.loader.load(self.variant.url, self._loaded, size=self.size, token=self.token)
        return True

    def hide(self):
        self.is_visible = False
        self.cancel()

    def cancel(self):
        if self.token is not None:
            self.token.cancel()
            self.token = None

    def _loaded(self, pil_img: Image.Image):
        self.token = None
        self.has_image = True
        self.on_image(pil_img)
