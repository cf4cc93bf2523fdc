from __future__ import annotations

import argparse

from api import run_warp


def main() -> None:
    """画像パスを受け取り warp ビューアを起動する。"""
    parser = argparse.ArgumentParser(description="cursor-driven warp over a still image")
    parser.add_argument("image", help="JPEG/PNG などの画像ファイル")
    args = parser.parse_args()
    run_warp(args.image)


if __name__ == "__main__":
    main()
