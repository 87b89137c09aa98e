"""Main entry point for VidScroll application."""

import sys
import traceback
import logging
import tkinter as tk
from tkinter import messagebox
from concurrent.futures import ThreadPoolExecutor

from .core import SearchClient, SearchViewModel, ThumbnailLoader
from .ui import VidScrollApp
from .utils import Config, log_error
from .version import __version__

logger = logging.getLogger(__name__)


def setup_logging():
    # Setup logging to console
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO)
    logging.getLogger("PIL").setLevel(logging.INFO)


def main():
    """Main entry point."""
    setup_logging()

    executor = ThreadPoolExecutor(thread_name_prefix="vidscroll")
    client = None
    loader = None
    try:
        logger.info(f"Starting VidScroll v{__version__}")
        config = Config()
        if not config.api_key:
            logger.warning(f"No API key configured; set one in Settings or {config.file}")

        client = SearchClient(config)
        app = None

        def dispatch(fn):
            # Marshal worker results back onto the Tk main loop
            app.after(0, fn)

        view_model = SearchViewModel(client, executor, dispatch=dispatch, page_size=config.page_size)
        loader = ThumbnailLoader(executor, dispatch=dispatch, timeout=config.request_timeout)
        app = VidScrollApp(view_model, loader, config)
        logger.info("Application initialized, starting main loop...")
        app.mainloop()
        logger.info("Application closed normally")
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}", exc_info=True)
        log_error("Fatal error in main()", e)
        # Try to show error dialog if Tkinter is partially working
        try:
            root = tk.Tk()
            root.withdraw()  # Hide main window
            error_msg = f"Application failed to start.\n\nError: {e}\n\n{traceback.format_exc()}"
            messagebox.showerror("VidScroll Error", error_msg)
        except tk.TclError:
            pass
        raise
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
        if client is not None:
            client.close()
        if loader is not None:
            loader.close()


if __name__ == "__main__":
    main()
