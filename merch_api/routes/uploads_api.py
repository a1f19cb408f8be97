import uuid

from flask import Blueprint, current_app, jsonify, request
from werkzeug.datastructures import FileStorage

from ..errors import FetchError, ValidationError
from ..extensions import image_store

bp = Blueprint("uploads_api", __name__)

TARGET_FOLDER = "target_images"
SWAP_FOLDER = "swap_images"
RESULT_FOLDER = "result_images"


def _read_upload(file: FileStorage) -> bytes:
    """Return the bytes of an uploaded image after type and size checks."""
    if file.mimetype not in current_app.config["ALLOWED_MIME_TYPES"]:
        raise ValidationError("Invalid file type. Only JPEG, PNG, and GIF are allowed.")
    limit = current_app.config["MAX_UPLOAD_BYTES"]
    data = file.read(limit + 1)
    if len(data) > limit:
        raise ValidationError(f"File too large (max {limit // (1024 * 1024)}MB).")
    return data


@bp.post("/upload")
def upload_images():
    target = request.files.get("targetImage")
    swap = request.files.get("swapImage")
    if not target or not swap:
        return jsonify({"message": "Both target image and swap image must be uploaded."}), 400

    target_bytes = _read_upload(target)
    swap_bytes = _read_upload(swap)

    try:
        target_url = image_store.store(target_bytes, TARGET_FOLDER, str(uuid.uuid4()))
        swap_url = image_store.store(swap_bytes, SWAP_FOLDER, str(uuid.uuid4()))
    except Exception as e:
        current_app.logger.exception("Error uploading images to Cloudinary")
        return jsonify({"message": "Error uploading images to Cloudinary.", "error": str(e)}), 500

    return jsonify({
        "message": "Images uploaded successfully!",
        "targetImageUrl": target_url,
        "swapImageUrl": swap_url,
    })


@bp.post("/uploadSwap")
def upload_swap_image():
    swap = request.files.get("swapImage")
    if not swap:
        return jsonify({"message": "Swap image must be uploaded."}), 400

    swap_bytes = _read_upload(swap)
    try:
        swap_url = image_store.store(swap_bytes, SWAP_FOLDER, str(uuid.uuid4()))
    except Exception as e:
        current_app.logger.exception("Error uploading swap image to Cloudinary")
        return jsonify({"message": "Error uploading swap image to Cloudinary.", "error": str(e)}), 500

    return jsonify({"message": "Swap image uploaded successfully!", "swapImageUrl": swap_url})


@bp.post("/uploadResult")
def upload_result_image():
    """Re-host an externally generated result image on Cloudinary."""
    body = request.get_json(silent=True)
    result_url = body.get("resultUrl") if isinstance(body, dict) else None
    if not result_url:
        return jsonify({"message": "Result URL must be provided."}), 400

    try:
        data = image_store.fetch(result_url)
    except FetchError as e:
        current_app.logger.warning("Failed to fetch result image %s: %s", result_url, e)
        return jsonify({"message": "Failed to fetch image from resultUrl."}), 400

    try:
        hosted_url = image_store.store(data, RESULT_FOLDER, str(uuid.uuid4()))
    except Exception as e:
        current_app.logger.exception("Error uploading result image to Cloudinary")
        return jsonify({"message": "Error uploading result image to Cloudinary.", "error": str(e)}), 500

    return jsonify({"message": "Result image uploaded successfully!", "resultImageUrl": hosted_url})
