import asyncio
import logging
from io import BytesIO

from google import genai
from google.genai import types
from PIL import Image, UnidentifiedImageError

from .errors import GenerationFailure

log = logging.getLogger(__name__)


def to_jpeg(data: bytes, quality: int = 92) -> bytes:
    """Re-encode whatever raster the model returned as a baseline JPEG."""
    try:
        with Image.open(BytesIO(data)) as img:
            buf = BytesIO()
            img.convert("RGB").save(buf, format="JPEG", quality=quality)
    except UnidentifiedImageError as exc:
        raise GenerationFailure("Image model returned data that is not an image") from exc
    return buf.getvalue()


class GeminiImageClient:
    """
    Uses google-genai client. Supports generate_images (Imagen) or generate_content (Gemini image).
    """

    def __init__(self, client: genai.Client, model: str = "imagen-4.0-generate-001", method: str = "generate_images"):
        self.client = client
        self.model = model
        self.method = method

    @classmethod
    def for_model(cls, client: genai.Client, model: str) -> "GeminiImageClient":
        method = "generate_images" if "imagen" in model.lower() else "generate_content"
        return cls(client, model, method)

    def generate(self, prompt: str, aspect_ratio: str) -> bytes:
        if self.method.lower() == "generate_content":
            response = self.client.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE"],
                    image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
                ),
            )

            text_parts = []

            if response.parts:
                for part in response.parts:
                    if part.inline_data and part.inline_data.data:
                        return to_jpeg(part.inline_data.data)
                    if part.text:
                        text_parts.append(part.text)

            error_msg = "Gemini returned no image data."
            if text_parts:
                clean_text = " ".join(text_parts)
                error_msg += f" The model responded with text instead: '{clean_text}'"

            raise GenerationFailure(error_msg)

        response = self.client.models.generate_images(
            model=self.model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                aspect_ratio=aspect_ratio,
                output_mime_type="image/jpeg",
            ),
        )

        if not response.generated_images:
            raise GenerationFailure("Imagen returned no images")

        image_obj = response.generated_images[0]

        image_bytes = None
        if getattr(image_obj, "image", None):
            image_bytes = image_obj.image.image_bytes

        if not image_bytes:
            raise GenerationFailure("Imagen response missing image payload")

        log.info("Generated %s image (%d bytes)", aspect_ratio, len(image_bytes))
        return to_jpeg(image_bytes)

    async def generate_image(self, prompt: str, aspect_ratio: str) -> bytes:
        return await asyncio.to_thread(self.generate, prompt, aspect_ratio)
