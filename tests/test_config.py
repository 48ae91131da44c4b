"""Tests for configuration, engine options and binary variants."""

import pytest

from stockfish_client.config import ClientConfig, as_command
from stockfish_client.options import EngineOption, Variant, format_option_value


class TestEngineOption:
    """Test option names and values."""

    def test_option_strings(self):
        """Test members carry the exact UCI option names."""
        assert EngineOption.SKILL_LEVEL.option_string == "Skill Level"
        assert EngineOption.UCI_LIMIT_STRENGTH.option_string == "UCI_LimitStrength"
        assert EngineOption.UCI_ELO.option_string == "UCI_Elo"

    @pytest.mark.parametrize(
        "value, expected",
        [(True, "true"), (False, "false"), (10, "10"), ("<empty>", "<empty>")],
    )
    def test_format_value(self, value, expected):
        """Test Python values render as UCI strings."""
        assert format_option_value(value) == expected


class TestVariant:
    """Test release binary names."""

    def test_default_linux(self):
        assert Variant.DEFAULT.file_name(False, "15.1") == "stockfish_15.1_x64"

    def test_avx2_windows(self):
        assert Variant.AVX2.file_name(True, "15.1") == "stockfish_15.1_x64_avx2.exe"


class TestClientConfig:
    """Test ClientConfig validation and command resolution."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.engine_path is None
        assert config.variant is Variant.DEFAULT
        assert config.options == {}
        assert config.shutdown_timeout == 1.0

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValueError):
            ClientConfig(shutdown_timeout=-1)

    def test_negative_grace_rejected(self):
        with pytest.raises(ValueError):
            ClientConfig(quit_grace=-0.5)

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError):
            ClientConfig(options={"Skill Level": 3})

    def test_resolve_file(self, tmp_path):
        """Test an explicit binary path is used with extra arguments."""
        binary = tmp_path / "stockfish"
        binary.write_text("")

        config = ClientConfig(engine_path=str(binary), engine_args=["--flag"])

        assert config.resolve_command() == [str(binary.absolute()), "--flag"]

    def test_resolve_directory(self, tmp_path, monkeypatch):
        """Test a directory resolves to the variant's release binary."""
        monkeypatch.setattr("sys.platform", "linux")
        binary = tmp_path / "stockfish_15.1_x64_bmi2"
        binary.write_text("")

        config = ClientConfig(engine_path=tmp_path, variant=Variant.BMI2)

        assert config.resolve_command() == [str(binary.absolute())]

    def test_resolve_missing(self, tmp_path):
        """Test a missing binary raises FileNotFoundError."""
        config = ClientConfig(engine_path=tmp_path / "nonexistent")

        with pytest.raises(FileNotFoundError):
            config.resolve_command()

    def test_auto_detect_failure(self, monkeypatch):
        """Test auto-detection fails cleanly when nothing is on PATH."""
        monkeypatch.setattr("shutil.which", lambda name: None)

        with pytest.raises(FileNotFoundError):
            ClientConfig().resolve_command()


def test_as_command():
    """Test paths and argv lists normalize to argv lists."""
    assert as_command("/usr/bin/stockfish") == ["/usr/bin/stockfish"]
    assert as_command(["python", "-m", "engine"]) == ["python", "-m", "engine"]
