"""Root test configuration: shared documents and renderer fixtures"""

import pytest

from qmdrender.config import Settings
from qmdrender.core.pipeline import build_renderers


SAMPLE_QMD = """\
---
title: "Sample Report"
author: Ada Lovelace
date: 2024-01-01
format: html
---

# Introduction

Inline math $E = mc^2$ and display math:

$$
\\int_0^1 x^2 dx
$$

:::{.callout-note}
A note with **bold** text.
:::

\\newpage

```python
print("cost: $5")
```
"""


@pytest.fixture(name="sample_qmd")
def sample_qmd_fixture():
    return SAMPLE_QMD


@pytest.fixture(name="settings")
def settings_fixture(tmp_path):
    return Settings(output_dir=str(tmp_path / "dist"))


@pytest.fixture(name="renderers")
def renderers_fixture(settings):
    return build_renderers(settings)


@pytest.fixture(name="tex_renderers")
def tex_renderers_fixture(settings):
    """Renderers that leave math delimiters in place."""
    return build_renderers(settings.model_copy(update={"math_output": "tex"}))
