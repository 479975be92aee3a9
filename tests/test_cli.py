"""Tests for the command line interface."""

import numpy as np
import pytest

from scene_text import cli
from scene_text.config import CLASSIFIER_DIR_ENV, DEFAULT_CLASSIFIER_NM1, DetectorConfig
from scene_text.errors import DetectorInitError
from scene_text.pipeline import ReadResult, SceneTextPipeline


class _FakePipeline:
    """Stands in for SceneTextPipeline; records constructor kwargs."""
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.error = None
        _FakePipeline.instances.append(self)

    load_image = staticmethod(SceneTextPipeline.load_image)

    def read(self, image):
        if self.error is not None:
            raise self.error
        return ReadResult(text="Hello World ")


@pytest.fixture
def fake_pipeline(monkeypatch):
    _FakePipeline.instances = []
    monkeypatch.setattr(cli, "SceneTextPipeline", _FakePipeline)
    return _FakePipeline


@pytest.fixture
def image_file(tmp_path):
    import cv2

    path = tmp_path / "sign.png"
    cv2.imwrite(str(path), np.full((20, 20, 3), 255, dtype=np.uint8))
    return path


class TestDetectorConfigFromArgs:

    def test_classifier_dir(self, tmp_path):
        args = cli.build_parser().parse_args(["x.png", "--classifier-dir", str(tmp_path)])
        config = cli.build_detector_config(args)
        assert config.classifier_nm1 == str(tmp_path / DEFAULT_CLASSIFIER_NM1)

    def test_explicit_file_overrides_dir(self, tmp_path):
        args = cli.build_parser().parse_args(
            ["x.png", "--classifier-dir", str(tmp_path), "--nm2", "/models/nm2.xml"]
        )
        config = cli.build_detector_config(args)
        assert config.classifier_nm2 == "/models/nm2.xml"
        assert config.classifier_nm1 == str(tmp_path / DEFAULT_CLASSIFIER_NM1)

    def test_environment_directory(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CLASSIFIER_DIR_ENV, str(tmp_path))
        args = cli.build_parser().parse_args(["x.png", "--parallel"])
        config = cli.build_detector_config(args)
        assert config == DetectorConfig.from_directory(tmp_path, parallel=True)

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(CLASSIFIER_DIR_ENV, raising=False)
        args = cli.build_parser().parse_args(["x.png"])
        assert cli.build_detector_config(args) == DetectorConfig()


class TestMain:

    def test_prints_text(self, fake_pipeline, image_file, capsys):
        assert cli.main([str(image_file), "--unique-words"]) == 0
        assert capsys.readouterr().out == "Hello World \n"
        assert fake_pipeline.instances[0].kwargs["unique_words"] is True

    def test_several_inputs_prefixed(self, fake_pipeline, image_file, capsys):
        assert cli.main([str(image_file), str(image_file)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["sign.png: Hello World "] * 2

    def test_missing_file_is_error(self, fake_pipeline, tmp_path, capsys):
        assert cli.main([str(tmp_path / "missing.png")]) == 1
        assert "failed to load image" in capsys.readouterr().err

    def test_stage_error_is_reported(self, fake_pipeline, image_file, monkeypatch, capsys):
        def failing_read(self, image):
            raise DetectorInitError("Classifier not found")

        monkeypatch.setattr(_FakePipeline, "read", failing_read)
        assert cli.main([str(image_file)]) == 1
        assert "Classifier not found" in capsys.readouterr().err

    def test_preview_written(self, fake_pipeline, image_file, tmp_path):
        preview = tmp_path / "preview.png"
        assert cli.main([str(image_file), "--preview", str(preview)]) == 0
        assert preview.exists()


class TestBackendOptions:

    def test_lang_rejected_with_onnx(self, fake_pipeline, image_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(image_file), "--backend", "onnx", "--lang", "deu"])
        assert exc_info.value.code == 2
        assert "--lang" in capsys.readouterr().err
        assert fake_pipeline.instances == []

    def test_lang_passed_to_tesseract(self, fake_pipeline, image_file):
        assert cli.main([str(image_file), "--lang", "deu"]) == 0
        assert fake_pipeline.instances[0].kwargs["recognizer"].language == "deu"

    def test_tesseract_language_defaults_to_english(self, fake_pipeline, image_file):
        assert cli.main([str(image_file)]) == 0
        assert fake_pipeline.instances[0].kwargs["recognizer"].language == "eng"

    def test_onnx_backend_without_lang(self, fake_pipeline, image_file):
        from scene_text.modules.text import OnnxRecognizer

        assert cli.main([str(image_file), "--backend", "onnx"]) == 0
        assert isinstance(fake_pipeline.instances[0].kwargs["recognizer"], OnnxRecognizer)
