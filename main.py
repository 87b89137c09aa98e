"""Launcher with absolute imports, used by PyInstaller builds."""

from vidscroll.app import main

if __name__ == "__main__":
    main()
