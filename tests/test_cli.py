"""Tests for the command line interface."""

import json
from pathlib import Path
import tempfile

from cli import main, parse_args


MAIN_SCENE = """[gd_scene load_steps=2 format=2]

[ext_resource path="res://ui/Panel.tscn" type="PackedScene" id=1]

[node name="Main" type="Control"]

[node name="Sub" parent="." instance=ExtResource( 1 )]
unique_name_in_owner = true
"""

PANEL_SCENE = """[gd_scene format=2]

[node name="Panel" type="Panel"]

[node name="Inner" type="Label" parent="."]
"""


def make_project(tmpdir: str) -> Path:
    root = Path(tmpdir).resolve()
    (root / "project.godot").touch()
    (root / "ui").mkdir()
    (root / "Main.tscn").write_text(MAIN_SCENE, encoding="utf-8")
    (root / "ui" / "Panel.tscn").write_text(PANEL_SCENE, encoding="utf-8")
    return root


class TestCLI:
    """Tests for argument handling and output."""

    def test_defaults(self):
        """Test default argument values."""
        parsed = parse_args([])

        assert parsed.target == "."
        assert parsed.format == "ascii"
        assert parsed.orientation == "TD"
        assert not parsed.expand_instances

    def test_ascii_single_scene(self, capsys):
        """Test printing one scene as a tree."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir)

            assert main([str(root / "Main.tscn")]) == 0

        out = capsys.readouterr().out
        assert "Main (Godot.Control)" in out
        assert "└── Sub (Godot.Panel) %" in out
        assert "Inner (Godot.Label)" in out

    def test_json_directory(self, capsys):
        """Test scanning a whole project as JSON."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir)

            assert main([str(root), "-f", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [scene["scene"] for scene in data["scenes"]] == ["Main.tscn", "ui/Panel.tscn"]
        assert data["scenes"][0]["unique"] == ["Sub"]

    def test_output_file(self):
        """Test writing output to a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = make_project(tmpdir)
            output = root / "out.mmd"

            assert main([str(root / "Main.tscn"), "-f", "mermaid", "-o", str(output)]) == 0
            assert output.read_text(encoding="utf-8").startswith("flowchart TD")

    def test_missing_target(self, capsys):
        """Test a target that does not exist."""
        assert main(["/nonexistent/Main.tscn"]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_scrape_error(self, capsys):
        """Test that resolution errors are reported with exit code 1."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / "project.godot").touch()
            (root / "Broken.tscn").write_text(
                '[gd_scene format=2]\n\n[node name="Main" type="Control"]\n\n'
                '[node name="Sub" parent="." instance=ExtResource( 5 )]\n',
                encoding="utf-8",
            )

            assert main([str(root / "Broken.tscn")]) == 1

        assert "Error scanning scene" in capsys.readouterr().err

    def test_type_map(self, capsys):
        """Test resolving script types through a type map file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / "project.godot").touch()
            (root / "Main.tscn").write_text(
                '[gd_scene format=2]\n\n'
                '[ext_resource path="res://Main.cs" type="Script" id=1]\n\n'
                '[node name="Main" type="Control"]\n'
                'script = ExtResource( 1 )\n',
                encoding="utf-8",
            )
            (root / "types.yaml").write_text("Main: Demo.MainScene\n", encoding="utf-8")

            assert main([str(root / "Main.tscn"), "--type-map", str(root / "types.yaml")]) == 0

        assert "Main (Demo.MainScene)" in capsys.readouterr().out

    def test_undecodable_scene(self, capsys):
        """Test that a scene with invalid UTF-8 is reported with exit code 1."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            (root / "project.godot").touch()
            (root / "Bad.tscn").write_bytes(b'[gd_scene format=2]\n\n[node name="\xff" type="Node"]\n')

            assert main([str(root / "Bad.tscn")]) == 1

        assert "Error scanning scene" in capsys.readouterr().err
