from specan_remote.config import FormConfig
from specan_remote.form import FormState, render_page


def test_state_uses_submitted_values():
    state = FormState.from_params(
        {"gain_slider": "30", "bright_slider": "0.74"}, FormConfig()
    )

    assert state == FormState(gain="30", brightness="0.74")


def test_state_falls_back_to_defaults():
    state = FormState.from_params({}, FormConfig(gain="20", brightness="0.9"))

    assert state == FormState(gain="20", brightness="0.9")


def test_rendered_page_carries_slider_defaults():
    page = render_page(FormState(gain="30", brightness="0.5"), title="LEDs")

    assert '<title>LEDs</title>' in page
    assert 'name="gain_slider" type="range" min="0" max="100" value="30"' in page
    assert 'name="bright_slider" type="range" min="0" max="1.0" value="0.5" step="0.02"' in page


def test_rendered_page_has_every_trigger_button():
    page = render_page(FormState(gain="50", brightness="0.5"), title="LEDs")

    for field in (
        "gain_local",
        "gain_remote",
        "gain_val",
        "bright_val",
        "grad_pos",
        "grad_neg",
        "disp_pos",
        "disp_neg",
        "grad_rev",
    ):
        assert f'name="{field}"' in page


def test_echoed_values_are_escaped():
    page = render_page(FormState(gain='"><script>', brightness="0.5"), title="LEDs")

    assert "<script>" not in page
    assert 'value="&quot;&gt;&lt;script&gt;"' in page
