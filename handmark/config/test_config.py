from handmark.config import Backend, Config, Platform
from handmark.config.args_parser import get_args


def test_defaults():
    config = Config()
    config.load_args(get_args([]))

    assert config.backend == Backend.MEDIAPIPE
    assert config.platform == Platform.DESKTOP
    assert config.mode == "landmark"
    assert config.camera is None
    assert config.mirror is None
    assert config.display_width is None
    assert not config.headless and not config.debug


def test_load_args():
    config = Config()
    config.load_args(get_args([
        "--backend", "stub",
        "--mode", "gesture",
        "--platform", "android",
        "--camera", "2",
        "--display-width", "800",
        "--models-dir", "/opt/models",
        "--no-mirror",
        "--headless",
    ]))

    assert config.backend == Backend.STUB
    assert config.mode == "gesture"
    assert config.platform == Platform.ANDROID
    assert config.camera == 2
    assert config.display_width == 800
    assert config.models_dir == "/opt/models"
    assert config.mirror is False
    assert config.headless
