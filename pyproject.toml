[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "recipegallery"
version = "0.1.0"
description = "A small recipe gallery: a SQLite recipe and comment store, a JSON API client and a server-rendered Flask web frontend."
requires-python = ">=3.10"
keywords = ["recipes", "gallery", "flask", "sqlite", "wsgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask>=2.2",
    "requests>=2.28",
    "markupsafe>=2.1",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[project.scripts]
recipegallery = "recipegallery.frontend:main"

[tool.hatch.build.targets.wheel]
packages = ["recipegallery"]

[tool.pytest.ini_options]
addopts = "-ra"
