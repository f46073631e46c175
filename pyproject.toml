[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bncurve"
version = "0.1.0"
description = "Pure Python arithmetic for the BN254 (alt_bn128) pairing-friendly curve: fields, groups and the optimal ate pairing"
requires-python = ">=3.10"
dependencies = []
keywords = ["bn254", "bn256", "alt_bn128", "elliptic curve", "pairing", "finite field"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bncurve"]

[tool.pytest.ini_options]
addopts = "-ra"
