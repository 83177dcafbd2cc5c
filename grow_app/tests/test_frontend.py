import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from grow_app.front_end.api_client import call_grow_api, KEY_DATA, KEY_ERROR, KEY_STATUS_CODE
from grow_app.front_end.tree_svg import render_tree_svg
from grow_app.front_end.utils import progress_label, show_recent_errors, sort_challenges, streak_label

STREAMLIT_APP = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "front_end", "streamlit_app.py")
BACKEND = "http://backend.test"


def test_streamlit_app_import():
    try:
        import grow_app.front_end.streamlit_app
    except Exception as e:
        pytest.fail(f"streamlit_app.py import failed: {e}")


def test_no_duplicate_set_page_config():
    with open(STREAMLIT_APP) as f:
        lines = f.readlines()
    count = sum(1 for line in lines if "st.set_page_config" in line)
    assert count == 1, f"Expected 1 st.set_page_config call, found {count}"


def test_no_st_cache():
    with open(STREAMLIT_APP) as f:
        content = f.read()
    assert "@st.cache" not in content, "Deprecated @st.cache found in streamlit_app.py. Use @st.cache_data or @st.cache_resource."


# --- API client ---

def make_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.content = b"x" if json_data is not None or text else b""
    response.text = text
    response.json.return_value = json_data
    return response


def test_call_api_success():
    with patch("requests.get", return_value=make_response(200, [{"id": "h1"}])) as mock_get:
        result = call_grow_api("/habits", backend_url=BACKEND + "/")
    mock_get.assert_called_once_with(f"{BACKEND}/habits", params=None, timeout=30)
    assert result == {KEY_STATUS_CODE: 200, KEY_DATA: [{"id": "h1"}], KEY_ERROR: None}


def test_call_api_post_sends_json():
    with patch("requests.post", return_value=make_response(201, {"id": "g1"})) as mock_post:
        result = call_grow_api("/goals", backend_url=BACKEND, method="post", data={"title": "Goal"})
    assert mock_post.call_args.kwargs["json"] == {"title": "Goal"}
    assert result[KEY_DATA] == {"id": "g1"}


def test_call_api_http_error_detail():
    with patch("requests.post", return_value=make_response(404, {"detail": "Goal 'x' not found."})):
        result = call_grow_api("/goals/x/tasks", backend_url=BACKEND, method="POST", data={"title": "t"})
    assert result[KEY_STATUS_CODE] == 404
    assert result[KEY_ERROR] == "Goal 'x' not found."
    assert result[KEY_DATA] is None


def test_call_api_connection_error():
    with patch("requests.delete", side_effect=requests.exceptions.ConnectionError("refused")):
        result = call_grow_api("/habits/h1", backend_url=BACKEND, method="DELETE")
    assert result[KEY_STATUS_CODE] == 503
    assert result[KEY_ERROR]


def test_call_api_timeout():
    with patch("requests.get", side_effect=requests.exceptions.Timeout()):
        assert call_grow_api("/habits", backend_url=BACKEND)[KEY_STATUS_CODE] == 504


def test_call_api_unsupported_method():
    assert call_grow_api("/habits", backend_url=BACKEND, method="PATCH")[KEY_STATUS_CODE] == 405


# --- Rendering helpers ---

def test_render_tree_svg():
    layout = {
        "trunk_width": 40,
        "trunk_height": 200,
        "left": [{
            "goal_id": "g1", "title": "Write <a> Book", "side": "left", "level": 0, "index": 0,
            "total_on_side": 1, "progress": 50, "length": 95, "angle": 20, "thickness": 10, "top": 40,
            "leaves": [{"task_id": "t1", "title": "Draft", "completed": True, "offset": 20, "top": -10}],
            "children": [],
        }],
        "right": [],
        "roots": [{"challenge_id": "c1", "title": "Breathe", "completed": False, "index": 0, "angle": 0}],
        "hidden_goal_ids": [],
    }
    svg = render_tree_svg(layout)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert "Write &lt;a&gt; Book" in svg
    assert svg.count("<ellipse") == 1
    assert svg.count("<line") == 1


def test_show_recent_errors(tmp_path):
    log_file = tmp_path / "error.log"
    log_file.write_text("first\nsecond\nthird\n")
    assert show_recent_errors(str(log_file), n=2) == ["third", "second"]
    assert show_recent_errors(str(tmp_path / "missing.log")) == ["Log file not found."]


def test_progress_label():
    assert progress_label(100) == "Complete"
    assert progress_label(33) == "33% complete"


def test_streak_label():
    assert streak_label(0) == "Start your streak today!"
    assert streak_label(5) == "🔥 5 day streak"


def test_sort_challenges_open_first():
    challenges = [
        {"id": "c1", "completed": True},
        {"id": "c2", "completed": False},
        {"id": "c3", "completed": True},
        {"id": "c4", "completed": False},
    ]
    assert [c["id"] for c in sort_challenges(challenges)] == ["c2", "c4", "c1", "c3"]


# --- Streamlit helpers ---

def test_mutate_queues_toast_then_reruns():
    from grow_app.front_end import streamlit_app

    with patch.object(streamlit_app, "api", return_value={KEY_STATUS_CODE: 201, KEY_DATA: {"id": "h1"}, KEY_ERROR: None}), \
         patch.object(streamlit_app, "st") as mock_st:
        mock_st.rerun.side_effect = RuntimeError("rerun")
        with pytest.raises(RuntimeError):
            streamlit_app.mutate("/habits", "POST", "Added.", "Failed.", {"title": "Walk"})
    mock_st.session_state.__setitem__.assert_called_once_with(streamlit_app.KEY_PENDING_TOAST, "Added.")


def test_mutate_failure_toasts_without_rerun():
    from grow_app.front_end import streamlit_app

    with patch.object(streamlit_app, "api", return_value={KEY_STATUS_CODE: 200, KEY_DATA: {"success": False}, KEY_ERROR: None}), \
         patch.object(streamlit_app, "st") as mock_st:
        assert streamlit_app.mutate("/habits/x", "DELETE", "Removed.", "Failed.") is None
    mock_st.toast.assert_called_once()
    mock_st.rerun.assert_not_called()
