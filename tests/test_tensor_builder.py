"""
Unit tests for the leaf image tensor builder.

Tests cover:
- Per-channel normalization
- Planar (NCHW) layout
- Alpha and greyscale handling
- Decode failures
"""
import numpy as np
import pytest

from conftest import encode_image, png_header
from ricecare.domain.exceptions import DecodeError
from ricecare.services.domain.tensor_builder import (
    CHANNEL_MEAN,
    CHANNEL_STD,
    NormalizedTensor,
    TensorBuilder,
    build_from_pixels,
)

PLANE = 224 * 224


def expected_value(v: int, channel: int) -> float:
    means = [0.485, 0.456, 0.406]
    stds = [0.229, 0.224, 0.225]
    return (v / 255 - means[channel]) / stds[channel]


# ============================================================
# Normalization Tests
# ============================================================

class TestNormalization:
    """Tests for per-channel normalization of pixel values."""
    
    @pytest.mark.parametrize("v", [0, 1, 64, 127, 128, 200, 254, 255])
    def test_uniform_image_planes(self, v):
        """Every element of each plane should equal (v/255 - mean_c) / std_c."""
        pixels = np.full((224, 224, 3), v, dtype=np.uint8)
        
        tensor = build_from_pixels(pixels)
        
        for channel in range(3):
            plane = tensor.data[channel * PLANE:(channel + 1) * PLANE]
            np.testing.assert_allclose(plane, expected_value(v, channel), rtol=1e-5, atol=1e-6)
    
    def test_constants(self):
        """Normalization constants should be the ImageNet statistics."""
        np.testing.assert_allclose(CHANNEL_MEAN, [0.485, 0.456, 0.406])
        np.testing.assert_allclose(CHANNEL_STD, [0.229, 0.224, 0.225])
    
    def test_distinct_channel_values(self):
        """Each channel should be normalized with its own constants."""
        pixels = np.empty((224, 224, 3), dtype=np.uint8)
        pixels[:, :] = (10, 100, 250)
        
        tensor = build_from_pixels(pixels)
        
        assert tensor.data[0] == pytest.approx(expected_value(10, 0), rel=1e-5)
        assert tensor.data[PLANE] == pytest.approx(expected_value(100, 1), rel=1e-5)
        assert tensor.data[2 * PLANE] == pytest.approx(expected_value(250, 2), rel=1e-5)


# ============================================================
# Layout Tests
# ============================================================

class TestPlanarLayout:
    """Tests for the channel-planar output layout."""
    
    def test_shape_and_length(self):
        """Tensor should have logical shape [1, 3, 224, 224] and a flat buffer."""
        tensor = build_from_pixels(np.zeros((224, 224, 3), dtype=np.uint8))
        
        assert isinstance(tensor, NormalizedTensor)
        assert tensor.shape == (1, 3, 224, 224)
        assert tensor.data.shape == (3 * PLANE,)
        assert tensor.data.dtype == np.float32
        assert tensor.as_array().shape == (1, 3, 224, 224)
    
    def test_pixel_written_at_plane_offset(self):
        """Pixel i of channel c should land at c * H * W + i."""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(224, 224, 3), dtype=np.uint8)
        
        tensor = build_from_pixels(pixels)
        
        for i in [0, 1, 223, 224, 5000, PLANE - 1]:
            row, col = divmod(i, 224)
            for channel in range(3):
                assert tensor.data[channel * PLANE + i] == pytest.approx(
                    expected_value(int(pixels[row, col, channel]), channel), rel=1e-5, abs=1e-6
                )
    
    def test_alpha_channel_ignored(self):
        """An alpha channel should not change the tensor."""
        rgb = np.full((224, 224, 3), 90, dtype=np.uint8)
        rgba = np.concatenate([rgb, np.full((224, 224, 1), 17, dtype=np.uint8)], axis=2)
        
        np.testing.assert_array_equal(build_from_pixels(rgba).data, build_from_pixels(rgb).data)
    
    def test_rejects_non_image_array(self):
        """A 2-D array is not a pixel buffer."""
        with pytest.raises(ValueError):
            build_from_pixels(np.zeros((224, 224), dtype=np.uint8))


# ============================================================
# Decoding Tests
# ============================================================

class TestDecoding:
    """Tests for decoding encoded image bytes."""
    
    def test_png_roundtrip_values(self, leaf_png):
        """A lossless uniform image should decode to exact normalized values."""
        tensor = TensorBuilder().build(leaf_png)
        
        assert tensor.shape == (1, 3, 224, 224)
        np.testing.assert_allclose(tensor.data[:PLANE], expected_value(120, 0), rtol=1e-5)
        np.testing.assert_allclose(tensor.data[PLANE:2 * PLANE], expected_value(180, 1), rtol=1e-5)
        np.testing.assert_allclose(tensor.data[2 * PLANE:], expected_value(200, 2), rtol=1e-5)
    
    def test_jpeg_accepted(self):
        """JPEG images should decode to a full-size tensor."""
        jpeg = encode_image((60, 140, 60), image_format="JPEG")
        
        tensor = TensorBuilder().build(jpeg)
        
        assert tensor.shape == (1, 3, 224, 224)
        assert tensor.data.size == 3 * PLANE
    
    def test_rgba_png_alpha_dropped(self):
        """Transparent PNGs should be read as RGB."""
        png = encode_image((120, 180, 200, 0), mode="RGBA")
        
        tensor = TensorBuilder().build(png)
        
        np.testing.assert_allclose(tensor.data[:PLANE], expected_value(120, 0), rtol=1e-5)
    
    def test_greyscale_expanded_to_rgb(self):
        """Greyscale images should fill all three planes."""
        png = encode_image(77, mode="L")
        
        tensor = TensorBuilder().build(png)
        
        for channel in range(3):
            assert tensor.data[channel * PLANE] == pytest.approx(expected_value(77, channel), rel=1e-5)
    
    def test_size_not_revalidated(self, caplog):
        """Images of another size are passed through with their own shape."""
        png = encode_image((1, 2, 3), size=(100, 50))
        
        with caplog.at_level("WARNING"):
            tensor = TensorBuilder(expected_size=224).build(png)
        
        assert tensor.shape == (1, 3, 50, 100)
        assert "100x50" in caplog.text
    
    def test_build_from_path(self, tmp_path, leaf_png):
        """Images should be readable from disk."""
        path = tmp_path / "leaf.png"
        path.write_bytes(leaf_png)
        
        tensor = TensorBuilder().build_from_path(path)
        
        assert tensor.shape == (1, 3, 224, 224)


class TestDecodeErrors:
    """Tests for undecodable input."""
    
    def test_garbage_bytes(self):
        with pytest.raises(DecodeError, match="Invalid image data"):
            TensorBuilder().build(b"definitely not an image")
    
    def test_empty_bytes(self):
        with pytest.raises(DecodeError, match="empty"):
            TensorBuilder().build(b"")
    
    def test_truncated_png(self, leaf_png):
        with pytest.raises(DecodeError):
            TensorBuilder().build(leaf_png[:20])
    
    def test_unaccepted_format(self):
        """Formats outside the accepted list should be rejected."""
        gif = encode_image((10, 20, 30), image_format="GIF")
        
        with pytest.raises(DecodeError, match="Unsupported image format"):
            TensorBuilder().build(gif)
    
    def test_configurable_formats(self, leaf_png):
        """Restricting formats to JPEG should reject PNG."""
        with pytest.raises(DecodeError):
            TensorBuilder(allowed_formats=["jpeg"]).build(leaf_png)
    
    def test_oversized_dimensions(self):
        """A header claiming a huge canvas is rejected before any pixels are decoded."""
        with pytest.raises(DecodeError, match="Invalid image data"):
            TensorBuilder().build(png_header(20000, 20000))
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeError, match="Cannot read image file"):
            TensorBuilder().build_from_path(tmp_path / "missing.jpg")
    
    def test_decode_error_status(self):
        """Decode errors should map to an unprocessable-entity status."""
        assert DecodeError("bad").status_code == 422


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
