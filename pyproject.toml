[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kernelkit"
version = "0.1.0"
description = "Kernel building blocks: bitmaps, circular lists, red-black trees, printf-style formatting, C string routines, AArch64 page-table and trap decoding."
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "aarch64", "rbtree", "page-table", "mmu", "bitmap", "printf"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["kernelkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
