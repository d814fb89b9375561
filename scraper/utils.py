# scraper/utils.py
import os
import re


def ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def normalize_whitespace(s: str) -> str:
    s = (s or "").replace("\xa0", " ").replace("\u200b", "")
    return re.sub(r"\s+", " ", s).strip()


def raw_html_path(base_dir: str, usfm: str, chapter: int, version_code: str) -> str:
    return os.path.join(base_dir, f"{usfm}_{chapter}_{version_code.upper()}.html")
