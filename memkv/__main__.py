"""Entry point for `python -m memkv`."""

from memkv.tool.memkv import main

if __name__ == "__main__":
    main()
