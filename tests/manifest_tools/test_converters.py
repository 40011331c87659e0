"""Format conversion and the converter registry."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from ManifestTools.converters import convert_to, get_converter, get_registry
from ManifestTools.converters import registry as converter_registry
from ManifestTools.errors import UnrecognizedFormatError, ValidationError
from ManifestTools.io_utils import get_manifest_from_file
from ManifestTools.models import ManifestFormat, ManifestInfo


class TestConvertToValidation:
    def test_none_manifest_info_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            convert_to(None, "chromeOS")

        assert str(excinfo.value) == "Manifest content is empty or not initialized."

    def test_plain_mapping_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            convert_to({"start_url": "/"}, "w3c")  # type: ignore[arg-type]

        assert str(excinfo.value) == "Manifest content is empty or not initialized."

    def test_missing_content_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            convert_to(ManifestInfo(content=None), "w3c")  # type: ignore[arg-type]

    def test_invalid_source_format(self) -> None:
        info = ManifestInfo(content={"start_url": "/"}, format="invalidFormat")

        with pytest.raises(UnrecognizedFormatError) as excinfo:
            convert_to(info, "w3c")

        assert str(excinfo.value) == "Manifest format is not recognized."
        assert excinfo.value.value == "invalidFormat"

    def test_invalid_target_format(self) -> None:
        info = ManifestInfo(content={"start_url": "/"}, format="w3c")

        with pytest.raises(UnrecognizedFormatError) as excinfo:
            convert_to(info, "invalidFormat")

        assert str(excinfo.value) == "Manifest format is not recognized."


class TestSameFormat:
    def test_same_format_returns_same_instance(self, assets_dir: Path) -> None:
        info = get_manifest_from_file(assets_dir / "manifest.json")
        info.format = "w3c"

        assert convert_to(info, "w3c") is info

    def test_format_names_match_case_insensitively(self) -> None:
        info = ManifestInfo(content={"name": "A"}, format="ChromeOS")

        assert convert_to(info, "CHROMEOS") is info

    def test_unset_format_defaults_to_w3c_on_input(self) -> None:
        info = ManifestInfo(content={"name": "A"})

        result = convert_to(info, ManifestFormat.W3C)

        assert result is info
        assert info.format == ManifestFormat.W3C

    def test_unset_target_means_w3c(self) -> None:
        info = ManifestInfo(content={"name": "A"}, format=ManifestFormat.W3C)

        assert convert_to(info, None) is info

    def test_unset_source_and_target_return_input_tagged_w3c(self) -> None:
        info = ManifestInfo(content={"start_url": "http://www.contoso.com/"})

        result = convert_to(info, None)

        assert result is info
        assert info.format == "w3c"
        assert info.content == {"start_url": "http://www.contoso.com/"}

    def test_default_is_persisted_even_when_converting(self) -> None:
        info = ManifestInfo(content={"start_url": "/"})

        convert_to(info, "chromeOS")

        assert info.format == ManifestFormat.W3C


class TestW3cChromeOs:
    def test_w3c_to_chrome_os(self, assets_dir: Path) -> None:
        info = get_manifest_from_file(assets_dir / "manifest.json")

        result = convert_to(info, "chromeOS")

        assert result is not info
        assert result.format is ManifestFormat.CHROME_OS
        assert result.content["app"] == {"launch": {"web_url": "http://www.contoso.com/"}}
        assert result.content["name"] == info.content["name"]
        assert "start_url" not in result.content
        assert "icons" not in result.content

    def test_chrome_os_to_w3c(self, assets_dir: Path) -> None:
        info = get_manifest_from_file(assets_dir / "chromeos_manifest.json")
        info.format = ManifestFormat.CHROME_OS

        result = convert_to(info, "w3c")

        assert result.format is ManifestFormat.W3C
        assert result.content["start_url"] == info.content["app"]["launch"]["web_url"]
        assert result.content["description"] == info.content["description"]
        assert "app" not in result.content
        assert "manifest_version" not in result.content

    def test_missing_launch_url_is_omitted(self) -> None:
        info = ManifestInfo(content={"name": "A", "app": {}}, format="chromeOS")

        result = convert_to(info, "w3c")

        assert result.content == {"name": "A"}

    def test_input_content_is_not_mutated(self, assets_dir: Path) -> None:
        info = get_manifest_from_file(assets_dir / "manifest.json")
        snapshot = copy.deepcopy(info.content)

        convert_to(info, "chromeOS")

        assert info.content == snapshot


class TestRegistry:
    def test_builtin_pairs_are_registered(self) -> None:
        registry = get_registry()

        assert (ManifestFormat.W3C, ManifestFormat.CHROME_OS) in registry
        assert (ManifestFormat.CHROME_OS, ManifestFormat.W3C) in registry

    def test_get_registry_returns_a_copy(self) -> None:
        registry = get_registry()
        registry.clear()

        assert get_registry()

    def test_unregistered_pair_raises(self, monkeypatch) -> None:
        monkeypatch.delitem(
            converter_registry._REGISTRY, (ManifestFormat.W3C, ManifestFormat.CHROME_OS)
        )

        with pytest.raises(UnrecognizedFormatError):
            get_converter(ManifestFormat.W3C, ManifestFormat.CHROME_OS)

    def test_registered_converter_is_used(self, monkeypatch) -> None:
        key = (ManifestFormat.W3C, ManifestFormat.CHROME_OS)
        monkeypatch.setitem(converter_registry._REGISTRY, key, converter_registry._REGISTRY[key])

        @converter_registry.register_converter(*key)
        def _tagging(content):
            return {"converted_from": content.get("name")}

        result = convert_to(ManifestInfo(content={"name": "A"}), "chromeOS")

        assert result.content == {"converted_from": "A"}
