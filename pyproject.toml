[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dwmkit"
version = "0.1.0"
description = "Tiling layout algorithms, tag helpers, status bar tools and an IPC client for a dynamic window manager setup"
requires-python = ">=3.10"
dependencies = []
keywords = ["window-manager", "tiling", "layout", "status-bar", "ipc", "x11"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dwmkit-blocks = "dwmkit.blocks:main"
dwmkit-msg = "dwmkit.ipc:main"

[tool.hatch.build.targets.wheel]
packages = ["dwmkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
