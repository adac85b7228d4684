"""Image fixtures built with Pillow."""

import io
import random

from PIL import Image


def make_png(width: int, height: int, color=(200, 80, 40)) -> bytes:
    """A flat-colored PNG."""
    output = io.BytesIO()
    Image.new("RGB", (width, height), color).save(output, format="PNG")
    return output.getvalue()


def make_jpeg(width: int, height: int, seed: int = 7) -> bytes:
    """A JPEG with smooth gradients and some texture, like a photo."""
    image = Image.linear_gradient("L").resize((width, height))
    image = Image.merge(
        "RGB",
        (image, image.rotate(90).resize((width, height)), image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)),
    )
    rng = random.Random(seed)
    for _ in range(200):
        x, y = rng.randrange(width), rng.randrange(height)
        image.paste(
            (rng.randrange(256), rng.randrange(256), rng.randrange(256)),
            (x, y, min(width, x + 40), min(height, y + 40)),
        )
    output = io.BytesIO()
    image.save(output, format="JPEG", quality=92)
    return output.getvalue()


def make_noise_png(width: int, height: int, seed: int = 1) -> bytes:
    """A PNG of random pixels; WebP cannot compress it well."""
    rng = random.Random(seed)
    image = Image.frombytes("RGB", (width, height), rng.randbytes(width * height * 3))
    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()
