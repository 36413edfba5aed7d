import pytest
import json
from gemrun.core.errors import ManifestError
from gemrun.resources.manifest import AssetManifest, load_manifest


def test_manifest_keeps_order_and_drops_duplicates(caplog):
    manifest = AssetManifest(["b.png", "a.png", "b.png", "c.png"])

    assert list(manifest) == ["b.png", "a.png", "c.png"]
    assert len(manifest) == 3
    assert "Duplicate asset" in caplog.text


def test_manifest_membership_and_extend():
    manifest = AssetManifest(["a.png"])
    bigger = manifest.extend(["b.png", "a.png"])

    assert "a.png" in manifest
    assert "b.png" not in manifest
    assert bigger.identifiers == ("a.png", "b.png")
    assert manifest == AssetManifest(["a.png"])


def test_load_manifest(tmp_path):
    path = tmp_path / "manifest.json"
    with open(path, "w") as f:
        json.dump({"assets": ["images/stone-block.png", "images/Rock1.png"]}, f)

    manifest = load_manifest(path)

    assert manifest.identifiers == ("images/stone-block.png", "images/Rock1.png")


def test_validation_error(tmp_path):
    path = tmp_path / "manifest.json"
    with open(path, "w") as f:
        json.dump({"assets": ["ok.png", 3]}, f)

    with pytest.raises(ManifestError, match="Validation error"):
        load_manifest(path)


def test_missing_assets_key(tmp_path):
    path = tmp_path / "manifest.json"
    with open(path, "w") as f:
        json.dump({"images": []}, f)

    with pytest.raises(ManifestError):
        load_manifest(path)


def test_missing_file(tmp_path):
    with pytest.raises(ManifestError, match="not found"):
        load_manifest(tmp_path / "nope.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "manifest.json"
    path.write_text("{assets: ")

    with pytest.raises(ManifestError, match="not valid JSON"):
        load_manifest(path)
