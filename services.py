import json, os, random, time
from decimal import Decimal, ROUND_HALF_UP
from flask import current_app
from werkzeug.utils import secure_filename

UPLOAD_URL_PREFIX = "/uploads/"

def upload_folder():
    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    return folder

def unique_filename(original):
    # <epoch millis>-<random suffix><original extension>
    ext = os.path.splitext(secure_filename(original or ""))[1].lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"

def save_upload(file_storage):
    """Write one uploaded file to disk and return its public path."""
    filename = unique_filename(file_storage.filename)
    file_storage.save(os.path.join(upload_folder(), filename))
    return UPLOAD_URL_PREFIX + filename

def remove_uploads(paths):
    for p in paths:
        try:
            os.remove(os.path.join(upload_folder(), p[len(UPLOAD_URL_PREFIX):]))
        except OSError as e:
            current_app.logger.warning(f"Could not remove upload {p}: {e}")

def parse_images(row):
    """Decode the stored images blob into a list of paths, never raising."""
    raw = row.get("images")
    if not raw:
        return [row["image"]] if row.get("image") else []
    try:
        images = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(images, list) or not all(isinstance(i, str) for i in images):
        return []
    return images

def dump_images(paths): return json.dumps(list(paths))

def line_total(price, quantity) -> float:
    total = Decimal(str(price)) * int(quantity)
    return float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
