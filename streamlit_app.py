"""
dither16 — 16-bit preview

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time

import numpy as np
import streamlit as st
from PIL import Image

from dither16.config import DitherConfig
from dither16.dithering import DitherStrategy, process_image
from dither16.errors import DitherError
from dither16.image_io import make_comparison_image

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="dither16",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = DitherConfig()

st.title("16-bit dither preview")
st.markdown(
    "Upload an image to see how it survives the trip to a 16-bit layout. "
    "Images with an alpha channel go through **RGBA4444**, opaque ones "
    "through **RGB565**. Noise is added before the bits are dropped so the "
    "lost precision shows up as fine grain instead of bands."
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2, ctrl3 = st.columns(3)
with ctrl1:
    strategy = st.radio(
        "Dither",
        [s.value for s in DitherStrategy],
        index=[s.value for s in DitherStrategy].index(_DEFAULTS.strategy.value),
        horizontal=True,
    )
with ctrl2:
    bayer_size = st.radio(
        "Bayer size", [4, 8], index=1, horizontal=True,
        disabled=strategy != DitherStrategy.ORDERED.value,
    )
with ctrl3:
    zoom = st.slider("Zoom", 1, 8, 1)

uploaded = st.file_uploader(
    "Select image", type=sorted(e.lstrip(".") for e in _DEFAULTS.SUPPORTED_EXTENSIONS),
)

if uploaded is not None:
    with Image.open(io.BytesIO(uploaded.getvalue())) as img:
        has_alpha = "A" in img.getbands() or "transparency" in img.info
        source = img.convert("RGBA" if has_alpha else "RGB")
        pixels = np.array(source, dtype=np.uint8)

    t0 = time.perf_counter()
    try:
        result = process_image(pixels, strategy=strategy, bayer_size=bayer_size)
    except DitherError as exc:
        st.error(str(exc))
        st.stop()
    elapsed = time.perf_counter() - t0

    w, h = result.width, result.height
    comparison = make_comparison_image(pixels, result.preview)
    if zoom > 1:
        comparison = comparison.resize(
            (comparison.width * zoom, comparison.height * zoom), Image.NEAREST,
        )
    st.image(comparison, caption="Source | 16-bit preview", use_container_width=True)

    m1, m2, m3 = st.columns(3)
    m1.metric("Resolution", f"{w} × {h}")
    m2.metric("Format", result.format.name)
    m3.metric("Time", f"{elapsed:.2f} s")

    buf = io.BytesIO()
    Image.fromarray(result.preview).save(buf, format="PNG")
    st.download_button(
        "Download preview",
        data=buf.getvalue(),
        file_name=f"{uploaded.name}{_DEFAULTS.output_suffix}",
        mime="image/png",
    )
else:
    st.caption("Select an image to begin.")
