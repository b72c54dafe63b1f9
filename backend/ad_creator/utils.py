# backend/ad_creator/utils.py
import io
import base64
from PIL import Image, ImageDraw


def image_to_base64_png(img):
    """
    Returns the image as bare base64-encoded PNG, the form Gemini uses in inlineData.
    """
    buffered = io.BytesIO()
    img.save(buffered, format="PNG", optimize=False)
    img_bytes = buffered.getvalue()
    return base64.b64encode(img_bytes).decode("utf-8")


def render_placeholder_image(label="DEMO", size=(512, 512)):
    """
    Flat two-tone card with a label, used wherever pitch mode needs an image.
    """
    w, h = size
    img = Image.new("RGB", size, (236, 242, 235))
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, int(h * 0.62), w, h], fill=(86, 130, 96))
    draw.ellipse([int(w * 0.35), int(h * 0.22), int(w * 0.65), int(h * 0.52)], fill=(255, 255, 255))
    draw.text((int(w * 0.06), int(h * 0.9)), label, fill=(255, 255, 255))
    return img
