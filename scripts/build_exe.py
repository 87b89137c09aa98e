#!/usr/bin/env python3
"""
Build script for a standalone VidScroll executable using PyInstaller.

Bundles the src/ package through the root main.py launcher, which uses
absolute imports.
"""

import shutil
import subprocess
import sys
import tomllib
from pathlib import Path


def get_version(project_root: Path) -> str:
    """Get the current version from pyproject.toml."""
    try:
        with open(project_root / "pyproject.toml", "rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError) as e:
        print(f"Warning: Could not read version from pyproject.toml: {e}")
        return "0.0.0"


def build_exe(onefile: bool = True, debug: bool = False, console: bool = False) -> bool:
    """Build the executable using PyInstaller."""
    project_root = Path(__file__).parent.parent
    app_path = project_root / "main.py"
    version = get_version(project_root)
    print(f"Building VidScroll v{version}")

    if not app_path.exists():
        print(f"Error: App file not found: {app_path}")
        return False

    exe_name = f"vidscroll-v{version}"
    cmd = [
        sys.executable, "-m", "PyInstaller",
        "--onefile" if onefile else "--onedir",
        f"--paths={project_root / 'src'}",
        # customtkinter ships theme json files that PyInstaller does not detect
        "--collect-data=customtkinter",
        "--collect-submodules=requests",
        f"--name={exe_name}",
        f"--distpath={project_root / 'build' / 'dist'}",
        f"--workpath={project_root / 'build'}",
        f"--specpath={project_root / 'build'}",
    ]
    if not console:
        cmd += ["--windowed", "--noconsole"]
    if not debug:
        cmd.append("--clean")
    cmd.append(str(app_path))

    print(f"Command: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, cwd=project_root, check=True)
    except subprocess.CalledProcessError as e:
        print(f"\n[ERROR] Build failed with exit code {e.returncode}")
        return False
    except KeyboardInterrupt:
        print("\n[INTERRUPTED] Build interrupted by user")
        return False

    dist = project_root / "build" / "dist"
    release_dir = project_root / "releases" / f"v{version}"
    release_dir.mkdir(parents=True, exist_ok=True)
    built = [p for p in dist.glob(f"{exe_name}*") if p.exists()]
    if not built:
        print(f"Warning: No build output found in {dist}")
        return True

    for path in built:
        target = release_dir / path.name
        if path.is_dir():
            if target.exists():
                shutil.rmtree(target)
            shutil.copytree(path, target)
        else:
            shutil.copy2(path, target)
        print(f"Release artifact: {target}")
    return True


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Build VidScroll executable with PyInstaller")
    parser.add_argument("--no-onefile", action="store_true",
                        help="Build as onedir directory instead of single executable")
    parser.add_argument("--debug", action="store_true",
                        help="Keep build artifacts between runs")
    parser.add_argument("--console", action="store_true",
                        help="Keep console window for debugging (shows errors)")
    args = parser.parse_args()

    sys.exit(0 if build_exe(onefile=not args.no_onefile, debug=args.debug, console=args.console) else 1)
