from __future__ import annotations

from typing import Callable, Optional

import pytest

from phonoscore.config.settings import reset_settings

_DEFAULT_CELLS = {
    "displaysize": "6.26 inches, 97.1 cm<sup>2</sup> (~81.1% screen-to-body ratio)",
    "batdescription1": "Non-removable Li-Po 4000 mAh battery",
    "internalmemory": "32 GB 3 GB RAM, 64 GB 4 GB RAM",
    "cam2modules": "20 MP, f/2.0, (wide), 0.9µm<br/>2 MP, (depth)",
}


def build_device_page(name: Optional[str] = "Xiaomi Redmi Note 6 Pro", **cells: Optional[str]) -> str:
    """GSMArena-like spec page; pass ``key=None`` to drop a row."""
    merged = {**_DEFAULT_CELLS, **cells}
    rows = "\n".join(
        f'<tr><td class="ttl">{key}</td><td class="nfo" data-spec="{key}">{value}</td></tr>'
        for key, value in merged.items()
        if value is not None
    )
    title = f'<h1 class="specs-phone-name-title" data-spec="modelname">{name}</h1>' if name is not None else ""
    return f"""
    <html>
      <body>
        <div class="article-info">{title}</div>
        <div id="specs-list"><table cellspacing="0">{rows}</table></div>
      </body>
    </html>
    """


@pytest.fixture
def device_page() -> Callable[..., str]:
    return build_device_page


@pytest.fixture
def perfect_page() -> str:
    return build_device_page(
        displaysize="5.5 inches, 83.4 cm<sup>2</sup>",
        batdescription1="Non-removable Li-Ion 3000 mAh battery",
        internalmemory="128 GB 4 GB RAM",
        cam2modules="10 MP, f/2.2",
    )


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()
