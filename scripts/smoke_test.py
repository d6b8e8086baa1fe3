#!/usr/bin/env python3
"""
API Smoke Test Script
=====================

Standalone script that exercises a running converter API end to end.

This script:
    1. Checks /health
    2. Generates a test image (horizontal gradient) with OpenCV
    3. Calls /convert, /convert/color and /export/svg for every palette
    4. Reports a summary and exits non-zero on any failure

Prerequisites:
    - The API must be running (ascii-converter --server)
    - Install dependencies: pip install -e ".[ui]"

Usage:
    python scripts/smoke_test.py
    python scripts/smoke_test.py --url http://localhost:3000 --width 60
"""

import argparse
import logging
import os
import sys
import time

import cv2
import numpy as np
import requests


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger(__name__)


PALETTES = ["normal", "dense", "sparse", "unicode"]


def make_test_image(width: int = 320, height: int = 160) -> bytes:
    """Encode a left-to-right gradient with a colour band as PNG."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    ramp = np.linspace(0, 255, width).astype(np.uint8)
    image[:, :] = ramp[None, :, None]
    image[: height // 4, :, 2] = 255
    ok, encoded = cv2.imencode(".png", image)
    if not ok:
        raise RuntimeError("Failed to encode test image")
    return encoded.tobytes()


def check(name: str, response: requests.Response, results: dict) -> bool:
    passed = response.status_code == 200
    results[name] = passed
    if passed:
        logger.info(f"  {name}: OK ({len(response.content)} bytes)")
    else:
        logger.error(f"  {name}: HTTP {response.status_code} {response.text[:200]}")
    return passed


def run_test(url: str, width: int) -> dict:
    """
    Run the smoke test.

    Args:
        url: API root URL
        width: Target width in characters

    Returns:
        Dict of check name -> passed
    """
    logger.info("=" * 60)
    logger.info("API Smoke Test")
    logger.info("=" * 60)
    logger.info(f"API URL: {url}")
    logger.info(f"Width: {width}")
    logger.info("=" * 60)

    results = {}
    start_time = time.time()

    try:
        health = requests.get(f"{url}/health", timeout=5)
    except requests.RequestException as e:
        logger.error(f"API unreachable: {e}")
        return {"health": False}
    check("health", health, results)

    image = make_test_image()
    for palette in PALETTES:
        logger.info(f"Palette: {palette}")
        data = {"width": str(width), "palette": palette}

        r = requests.post(f"{url}/convert", files={"image": ("test.png", image, "image/png")}, data=data, timeout=30)
        if check(f"convert[{palette}]", r, results):
            rows = r.json()["ascii"].split("\n")[:-1]
            if any(len(row) != width for row in rows):
                logger.error(f"  convert[{palette}]: row width mismatch")
                results[f"convert[{palette}]"] = False

        r = requests.post(f"{url}/convert/color", files={"image": ("test.png", image, "image/png")}, data=data, timeout=30)
        check(f"convert/color[{palette}]", r, results)

        r = requests.post(
            f"{url}/export/svg",
            files={"image": ("test.png", image, "image/png")},
            data={**data, "color": "true"},
            timeout=30,
        )
        check(f"export/svg[{palette}]", r, results)

    total_time = time.time() - start_time
    passed = sum(1 for ok in results.values() if ok)

    logger.info("=" * 60)
    logger.info("FINAL SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Total runtime: {total_time:.1f} seconds")
    logger.info(f"Checks passed: {passed}/{len(results)}")
    logger.info("=" * 60)

    if passed == len(results):
        logger.info("✅ TEST PASSED")
    else:
        logger.error("❌ TEST FAILED")

    return results


def main():
    parser = argparse.ArgumentParser(description="Smoke test for the ASCII converter API")
    parser.add_argument(
        "--url",
        type=str,
        default=os.environ.get("ASCII_API_URL", "http://localhost:3000"),
        help="API root URL",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=80,
        help="Target width in characters (default: 80)",
    )
    args = parser.parse_args()

    results = run_test(url=args.url.rstrip("/"), width=args.width)
    sys.exit(0 if results and all(results.values()) else 1)


if __name__ == "__main__":
    main()
