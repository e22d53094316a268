"""
Tests for imageatlas CLI

These tests verify the CLI command structure, error handling and that
the commands write page files.
"""

import json

import pytest
from click.testing import CliRunner
from PIL import Image

from imageatlas.cli import cli


@pytest.fixture
def images(tmp_path):
    paths = []
    for name, color in (("grass", (0, 255, 0, 255)), ("dirt", (120, 80, 40, 255))):
        path = tmp_path / f"{name}.png"
        Image.new("RGBA", (8, 8), color).save(path)
        paths.append(path)
    return paths


class TestCLI:
    """Test CLI command structure and basic functionality"""

    def test_cli_help(self):
        """Test that CLI help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'imageatlas' in result.output
        assert 'build' in result.output
        assert 'pack' in result.output

    def test_cli_version(self):
        """Test that version flag works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_build_help(self):
        """Test that build command help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', '--help'])
        assert result.exit_code == 0
        assert 'Build an atlas from a JSON manifest' in result.output
        assert '--output' in result.output
        assert '--packer' in result.output

    def test_build_missing_output(self, tmp_path):
        """Test that build command requires output flag"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(tmp_path / 'atlas.json')])
        assert result.exit_code != 0
        assert 'output' in result.output.lower() or 'required' in result.output.lower()

    def test_build_missing_manifest(self, tmp_path):
        """Test that build command handles a missing manifest"""
        runner = CliRunner()
        result = runner.invoke(cli, ['build', '/nonexistent/atlas.json', '-o', str(tmp_path)])
        assert result.exit_code != 0
        assert 'not found' in result.output.lower()


class TestBuildCommand:
    """build writes pages described by a manifest"""

    def test_build_works(self, tmp_path, images):
        manifest = {
            "max_page_count": 1,
            "size": 64,
            "mip": {"kind": "block", "filter": "box", "block_size": 16},
            "entries": [{"path": p.name, "key": p.stem, "wrap": "repeat"} for p in images],
        }
        manifest_path = tmp_path / "atlas.json"
        manifest_path.write_text(json.dumps(manifest))
        out_dir = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(manifest_path), '-o', str(out_dir), '--packer', 'shelf', '-v'])

        assert result.exit_code == 0, result.output
        assert 'Success' in result.output
        assert 'Pages: 1' in result.output
        assert (out_dir / 'atlas_0_0.png').exists()
        assert (out_dir / 'atlas_0_2.png').exists()
        table = json.loads((out_dir / 'atlas.json').read_text())
        assert set(table['texcoords']) == {'grass', 'dirt'}

    def test_build_reports_atlas_errors(self, tmp_path, images):
        manifest = {
            "max_page_count": 1,
            "size": 8,
            "mip": {"kind": "padding", "padding": 1},
            "entries": [{"path": str(images[0])}],
        }
        manifest_path = tmp_path / "atlas.json"
        manifest_path.write_text(json.dumps(manifest))

        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(manifest_path), '-o', str(tmp_path / 'out')])
        assert result.exit_code == 1
        assert 'Atlas Error' in result.output

    def test_build_reports_invalid_manifest(self, tmp_path):
        manifest_path = tmp_path / "atlas.json"
        manifest_path.write_text(json.dumps({"entries": []}))

        runner = CliRunner()
        result = runner.invoke(cli, ['build', str(manifest_path), '-o', str(tmp_path / 'out')])
        assert result.exit_code == 1
        assert 'Manifest Error' in result.output


class TestPackCommand:
    """pack builds an atlas straight from image files"""

    def test_pack_works(self, tmp_path, images):
        out_dir = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(cli, [
            'pack', *[str(p) for p in images],
            '-o', str(out_dir),
            '--size', '32',
            '--filter', 'box',
            '--block', '8',
            '--name', 'tiles',
        ])

        assert result.exit_code == 0, result.output
        table = json.loads((out_dir / 'tiles.json').read_text())
        assert set(table['texcoords']) == {'grass', 'dirt'}
        assert table['mip_level_count'] == 3
        assert table['padding'] == 4

    def test_pack_without_filter_has_no_mips(self, tmp_path, images):
        out_dir = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', str(images[0]), '-o', str(out_dir), '--size', '8'])

        assert result.exit_code == 0, result.output
        table = json.loads((out_dir / 'atlas.json').read_text())
        assert table['mip_level_count'] == 1
        assert table['texcoords']['grass']['uv'] == [0.0, 0.0, 1.0, 1.0]

    def test_pack_pages_exhausted(self, tmp_path, images):
        runner = CliRunner()
        result = runner.invoke(cli, [
            'pack', *[str(p) for p in images],
            '-o', str(tmp_path / 'out'),
            '--size', '8',
        ])
        assert result.exit_code == 1
        assert 'Atlas Error' in result.output

    def test_pack_missing_image(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', '/nonexistent/a.png', '-o', str(tmp_path), '--size', '8'])
        assert result.exit_code == 1
        assert 'not found' in result.output.lower()

    def test_pack_rejects_block_with_padding(self, tmp_path, images):
        runner = CliRunner()
        result = runner.invoke(cli, [
            'pack', str(images[0]),
            '-o', str(tmp_path / 'out'),
            '--size', '32',
            '--block', '8',
            '--padding', '2',
        ])
        assert result.exit_code == 2
        assert '--block' in result.output
        assert not (tmp_path / 'out').exists()

    def test_pack_filter_help_mentions_padding(self):
        runner = CliRunner()
        result = runner.invoke(cli, ['pack', '--help'])
        assert result.exit_code == 0
        assert 'needs' in result.output
        assert '--padding' in result.output

    def test_pack_full_chain_with_padding(self, tmp_path, images):
        out_dir = tmp_path / "out"
        runner = CliRunner()
        result = runner.invoke(cli, [
            'pack', str(images[0]),
            '-o', str(out_dir),
            '--size', '16',
            '--filter', 'box',
            '--padding', '2',
        ])
        assert result.exit_code == 0, result.output
        table = json.loads((out_dir / 'atlas.json').read_text())
        assert table['mip_level_count'] == 5
        assert table['padding'] == 2

    def test_pack_duplicate_stems(self, tmp_path, images):
        other = tmp_path / "other"
        other.mkdir()
        Image.new("RGBA", (4, 4)).save(other / "grass.png")
        runner = CliRunner()
        result = runner.invoke(cli, [
            'pack', str(images[0]), str(other / 'grass.png'),
            '-o', str(tmp_path / 'out'),
            '--size', '32',
        ])
        assert result.exit_code == 1
        assert 'Duplicate' in result.output
