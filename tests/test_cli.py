"""Tests for the batch CLAHE command line."""

import csv

import numpy as np
import pytest

from tilecontrast.cli import clahe_main, run_clahe
from tilecontrast.clahe import equalize
from tilecontrast.io import read_gray_u8, read_raw_u8, write_gray_u8, write_raw_u8


@pytest.fixture
def png_inputs(tmp_path, noisy_image):
    src = tmp_path / "in"
    src.mkdir()
    write_gray_u8(str(src / "a.png"), noisy_image)
    write_gray_u8(str(src / "b.png"), noisy_image[::-1].copy())
    return src


def test_run_clahe_writes_output(tmp_path, noisy_image, png_inputs):
    row = run_clahe(str(png_inputs / "a.png"), str(tmp_path / "out"), tiles=(4, 3), clip_limit=2.0)
    out = read_gray_u8(row["output"])
    H, W = noisy_image.shape
    expected = equalize(noisy_image.reshape(-1), W, H, 4, 3, 2.0).reshape(H, W)
    np.testing.assert_array_equal(out, expected)
    assert (row["out_width"], row["out_height"]) == (W, H)
    assert "contrast_gain" in row


def test_run_clahe_downscale_and_preview(tmp_path, png_inputs):
    row = run_clahe(
        str(png_inputs / "a.png"), str(tmp_path / "out"),
        tiles=(4, 4), target=(16, 12), out_format="png", preview=True,
    )
    assert read_gray_u8(row["output"]).shape == (12, 16)
    assert (row["out_width"], row["out_height"]) == (16, 12)
    assert (tmp_path / "out" / "a_clahe_preview.png").exists()


def test_run_clahe_bad_format(tmp_path, png_inputs):
    with pytest.raises(ValueError):
        run_clahe(str(png_inputs / "a.png"), str(tmp_path / "out"), out_format="jpg2000")


def test_main_batch_with_stats(tmp_path, png_inputs, capsys):
    outdir = tmp_path / "out"
    clahe_main([
        "--input", str(png_inputs / "*.png"),
        "--outdir", str(outdir),
        "--tiles", "4", "4",
        "--clip", "2.5",
        "--stats",
    ])
    assert (outdir / "a_clahe.tif").exists()
    assert (outdir / "b_clahe.tif").exists()
    with open(outdir / "summary.csv", newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 2
    assert "[OK]" in capsys.readouterr().out


def test_main_raw_inputs(tmp_path, noisy_image):
    H, W = noisy_image.shape
    write_raw_u8(str(tmp_path / "frame.raw"), noisy_image)
    clahe_main([
        "--input", str(tmp_path / "*.raw"),
        "--outdir", str(tmp_path / "out"),
        "--raw-size", str(W), str(H),
        "--format", "raw",
        "--target", str(W // 2), str(H // 2),
    ])
    out = read_raw_u8(str(tmp_path / "out" / "frame_clahe.raw"), W // 2, H // 2)
    assert out.shape == (H // 2, W // 2)


def test_main_skips_bad_file(tmp_path, png_inputs, capsys):
    import tifffile
    tifffile.imwrite(str(png_inputs / "c.tif"), np.zeros((8, 8, 3), dtype=np.uint8), photometric="rgb")
    clahe_main([
        "--input", str(png_inputs / "*"),
        "--outdir", str(tmp_path / "out"),
        "--tiles", "2", "2",
    ])
    out = capsys.readouterr().out
    assert "[warn] skipped" in out
    assert (tmp_path / "out" / "a_clahe.tif").exists()


def test_main_no_match(tmp_path):
    with pytest.raises(SystemExit):
        clahe_main(["--input", str(tmp_path / "*.none"), "--outdir", str(tmp_path)])
