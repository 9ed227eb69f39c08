"""Module entrypoint for ``python -m shellfm``."""

from .cli import entrypoint


if __name__ == "__main__":
    entrypoint()
