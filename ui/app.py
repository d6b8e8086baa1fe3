"""
ASCII Converter Web UI
======================

Streamlit front end for the ASCII converter API.

Architecture:
    - Uploads go to the API over HTTP (multipart form)
    - All conversion happens server-side; this app only displays results

Usage:
    streamlit run ui/app.py

Environment:
    ASCII_API_URL: API root (default: http://localhost:3000)
"""

import html
import os
import time
from typing import List, Optional, Tuple

import requests
import streamlit as st

# =============================================================================
# Configuration
# =============================================================================

API_URL = os.getenv("ASCII_API_URL", "http://localhost:3000")

PALETTES = ["normal", "dense", "sparse", "unicode"]

st.set_page_config(
    page_title="ASCII Converter",
    page_icon="🖼️",
    layout="wide",
)

# =============================================================================
# Networking helpers
# =============================================================================

def fetch_api_health() -> bool:
    """Check API liveness."""
    try:
        r = requests.get(f"{API_URL}/health", timeout=2)
        return r.status_code == 200
    except requests.RequestException:
        return False


def _post(path: str, field: str, upload, data: dict, timeout: float = 60) -> requests.Response:
    files = {field: (upload.name, upload.getvalue(), upload.type or "application/octet-stream")}
    return requests.post(f"{API_URL}{path}", files=files, data=data, timeout=timeout)


def _error_message(response: requests.Response) -> str:
    try:
        return response.json().get("error", f"HTTP {response.status_code}")
    except ValueError:
        return f"HTTP {response.status_code}"


def convert_image(upload, width: int, palette: str, color: bool) -> Tuple[Optional[dict], Optional[str]]:
    """Call /convert or /convert/color. Returns (payload, error)."""
    path = "/convert/color" if color else "/convert"
    try:
        r = _post(path, "image", upload, {"width": str(width), "palette": palette})
    except requests.RequestException as e:
        return None, str(e)
    if r.status_code != 200:
        return None, _error_message(r)
    return r.json(), None


def export_svg(upload, width: int, palette: str, color: bool, font_size: int) -> Tuple[Optional[bytes], Optional[str]]:
    """Call /export/svg. Returns (svg_bytes, error)."""
    data = {
        "width": str(width),
        "palette": palette,
        "color": "true" if color else "false",
        "fontSize": str(font_size),
    }
    try:
        r = _post("/export/svg", "image", upload, data)
    except requests.RequestException as e:
        return None, str(e)
    if r.status_code != 200:
        return None, _error_message(r)
    return r.content, None


def convert_video(upload, width: int, palette: str, color: bool, fps: int) -> Tuple[Optional[dict], Optional[str]]:
    """Call /convert/video. Returns (payload, error)."""
    data = {
        "width": str(width),
        "palette": palette,
        "fps": str(fps),
        "color": "true" if color else "false",
    }
    try:
        r = _post("/convert/video", "video", upload, data, timeout=300)
    except requests.RequestException as e:
        return None, str(e)
    if r.status_code != 200:
        return None, _error_message(r)
    return r.json(), None


# =============================================================================
# Display helpers
# =============================================================================

PRE_STYLE = (
    "background:#000;color:#fff;font-family:monospace;font-size:{size}px;"
    "line-height:1.0;white-space:pre;overflow:auto;padding:8px;"
)


def lines_to_text(lines: List[List[dict]]) -> str:
    """Drop colour from a coloured payload."""
    return "".join("".join(cell["char"] for cell in row) + "\n" for row in lines)


def colored_html(lines: List[List[dict]], font_size: int) -> str:
    """Render coloured lines as a <pre> block of coloured spans."""
    rows = []
    for row in lines:
        spans = "".join(
            f'<span style="color:rgb({c["r"]},{c["g"]},{c["b"]})">{html.escape(c["char"])}</span>'
            for c in row
        )
        rows.append(spans)
    body = "\n".join(rows)
    return f'<pre style="{PRE_STYLE.format(size=font_size)}">{body}</pre>'


def plain_html(text: str, font_size: int) -> str:
    return f'<pre style="{PRE_STYLE.format(size=font_size)}">{html.escape(text)}</pre>'


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


# =============================================================================
# Main UI
# =============================================================================

def main():
    # ── Sidebar ───────────────────────────────────────────────────────────────
    with st.sidebar:
        st.header("Input")
        mode = st.radio("Mode", ["Image", "Video"], horizontal=True)

        st.divider()
        st.header("Options")
        palette = st.selectbox("Palette", PALETTES, index=0)
        width = st.slider("Width (characters)", 20, 300, 100, 10)
        color = st.checkbox("Colour", value=False)
        display_size = st.slider("Display font size (px)", 4, 16, 8)

        if mode == "Video":
            fps = st.slider("Sampling FPS", 1, 15, 10)
        else:
            fps = 10
            svg_font_size = st.number_input("SVG font size", 4, 48, 12)

        st.divider()
        st.text(f"API: {API_URL}")

    # ── Top Bar ───────────────────────────────────────────────────────────────
    if fetch_api_health():
        st.success("🟢 API Online")
    else:
        st.error("🔴 API Offline")
        return

    # ── Image mode ────────────────────────────────────────────────────────────
    if mode == "Image":
        upload = st.file_uploader("Upload an image", type=["jpg", "jpeg", "png", "bmp", "webp"])
        if upload is None:
            st.info("Upload an image to convert it.")
            return

        payload, error = convert_image(upload, width, palette, color)
        if error:
            st.error(error)
            return

        left_col, right_col = st.columns([1, 3])
        with left_col:
            st.image(upload, caption=upload.name, use_container_width=True)
            st.metric("Original", format_bytes(payload.get("originalSize", 0)))
            st.metric("ASCII", format_bytes(payload.get("asciiSize", 0)))
            st.caption(f"{payload.get('originalWidth')}x{payload.get('originalHeight')} px")

        with right_col:
            if color:
                text = lines_to_text(payload["lines"])
                st.markdown(colored_html(payload["lines"], display_size), unsafe_allow_html=True)
            else:
                text = payload["ascii"]
                st.markdown(plain_html(text, display_size), unsafe_allow_html=True)

        stem = os.path.splitext(upload.name)[0]
        dl1, dl2 = st.columns(2)
        with dl1:
            st.download_button("Download TXT", text, file_name=f"{stem}_ascii.txt")
        with dl2:
            svg, svg_error = export_svg(upload, width, palette, color, int(svg_font_size))
            if svg_error:
                st.error(svg_error)
            else:
                st.download_button("Download SVG", svg, file_name=f"{stem}_svg.svg", mime="image/svg+xml")
        return

    # ── Video mode ────────────────────────────────────────────────────────────
    upload = st.file_uploader("Upload a video", type=["mp4", "webm", "mov", "avi", "mkv"])
    if upload is None:
        st.info("Upload a short video (20s max is sampled).")
        return

    with st.spinner("Extracting and converting frames..."):
        payload, error = convert_video(upload, width, palette, color, fps)
    if error:
        st.error(error)
        return

    meta = payload["metadata"]
    frames = payload["frames"]
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Frames", meta["frameCount"])
    m2.metric("Duration", f"{meta['duration']:.1f}s")
    m3.metric("Source FPS", f"{meta['originalFps']:.1f}")
    m4.metric("Size", format_bytes(meta["originalSize"]))

    if not st.button("▶ Play"):
        index = st.slider("Frame", 0, len(frames) - 1, 0) if len(frames) > 1 else 0
        frames_to_show = [frames[index]]
    else:
        frames_to_show = frames

    placeholder = st.empty()
    start = time.time()
    for frame in frames_to_show:
        delay = frame["timestamp"] - (time.time() - start)
        if len(frames_to_show) > 1 and delay > 0:
            time.sleep(delay)
        if "lines" in frame:
            placeholder.markdown(colored_html(frame["lines"], display_size), unsafe_allow_html=True)
        else:
            placeholder.markdown(plain_html(frame["ascii"], display_size), unsafe_allow_html=True)


if __name__ == "__main__":
    main()
