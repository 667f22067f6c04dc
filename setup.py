"""Setup for FocusSync.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "FocusSync",
        "CFBundleDisplayName": "FocusSync",
        "CFBundleIdentifier": "com.focussync.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

# py2app is only needed (and only installable) when bundling the app.
bundle_kwargs = {}
if "py2app" in sys.argv:
    bundle_kwargs = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="FocusSync",
    version="0.1.0",
    packages=find_packages(include=["focussync", "focussync.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "pydantic>=2.5",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": ["focussync = focussync.__main__:main"],
    },
    **bundle_kwargs,
)
