"""HTML control page for the LED display."""

from __future__ import annotations

import html
from dataclasses import dataclass
from string import Template
from typing import Mapping

from .config import FormConfig
from .events import BRIGHT_SLIDER_FIELD, GAIN_SLIDER_FIELD


@dataclass(frozen=True, slots=True)
class FormState:
    """Slider positions shown when the page is rendered."""

    gain: str
    brightness: str

    @classmethod
    def from_params(cls, params: Mapping[str, str], defaults: FormConfig) -> "FormState":
        return cls(
            gain=str(params.get(GAIN_SLIDER_FIELD, defaults.gain)),
            brightness=str(params.get(BRIGHT_SLIDER_FIELD, defaults.brightness)),
        )


PAGE_TEMPLATE = Template(
    """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width" />
  <title>$title</title>
  <style>
    body {
      background-color: black;
      color: #e6e9ef;
      font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif;
    }
    h1 {
      font-size: 22px;
    }
    td {
      vertical-align: middle;
    }
    .slider {
      width: 220px;
    }
    .block {
      display: block;
      width: 100%;
      min-width: 96px;
      padding: 10px 14px;
      font-size: 16px;
    }
  </style>
</head>
<body>
  <center>
  <form action="" method="get">
    <br>
    <h1>Gain / Brightness</h1>
    <table cellpadding="5">
      <tr>
        <td>Gain</td>
        <td><input name="gain_slider" type="range" min="0" max="100" value="$gain" class="slider"></td>
        <td><input name="gain_val" class="block" type="submit" value="Update" /></td>
      </tr>
      <tr>
        <td>Brightness</td>
        <td><input name="bright_slider" type="range" min="0" max="1.0" value="$brightness" step="0.02" class="slider"></td>
        <td><input name="bright_val" class="block" type="submit" value="Update" /></td>
      </tr>
    </table>
    <table cellpadding="5">
      <tr>
        <td><input name="gain_local" class="block" type="submit" value="Local Control" /></td>
        <td><input name="gain_remote" class="block" type="submit" value="Remote Control" /></td>
      </tr>
    </table>
    <br><hr>
    <h1>Gradient Display</h1>
    <table cellpadding="5">
      <tr>
        <td>Gradient Type</td>
        <td><input name="grad_pos" class="block" type="submit" value="&lt;" /></td>
        <td><input name="grad_neg" class="block" type="submit" value="&gt;" /></td>
      </tr>
      <tr>
        <td>Display Type</td>
        <td><input name="disp_pos" class="block" type="submit" value="&lt;" /></td>
        <td><input name="disp_neg" class="block" type="submit" value="&gt;" /></td>
      </tr>
      <tr>
        <td>Gradient Direction</td>
        <td colspan="2"><input name="grad_rev" class="block" type="submit" value="Toggle" /></td>
      </tr>
    </table>
  </form>
  </center>
</body>
</html>
"""
)


def render_page(state: FormState, *, title: str) -> str:
    return PAGE_TEMPLATE.substitute(
        title=html.escape(title),
        gain=html.escape(state.gain, quote=True),
        brightness=html.escape(state.brightness, quote=True),
    )
