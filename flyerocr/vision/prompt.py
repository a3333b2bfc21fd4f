"""Instruction text and response schema shared by all vision backends."""

from __future__ import annotations

PROMPT = """\
Act as a Senior Data Automation Bot and OCR Expert. Perform a high-precision
analysis of the provided retail flyer image.

### 1. Accuracy check
If the image is blurry or artifacts make the data unreadable, return exactly:
{"error": "blurry"}

### 2. Extraction rules (one object per product)
- description (English):
  - Extract the product name exactly as shown (e.g. "Cup Cake Box Assorted").
  - REMOVE the characters *, " and #.
  - SUFFIX RULE: put exactly ONE space before a unit suffix
    (e.g. " /kg", " /500gm", " /Box").
- arabicDescription:
  - ONLY extract Arabic text that is VISIBLY PRINTED for that product.
  - NO AUTO-TRANSLATION: if no Arabic text is printed, return "".
  - Append a visible measurement with exactly ONE space (e.g. " /كيلو", " /علبة").
- qty:
  - Identify the pack quantity (e.g. 2 PCS, 3 Pack).
  - If the quantity is 1, "Each" or not specified, return null.
  - Only return numbers greater than 1.
- regularPrice (the "WAS" price):
  - Remove ALL currency symbols (AED, SAR, $, ...), tags and strike-through artifacts.
  - If it is not visibly present, return "".
  - NO ZEROES: never return "0.00" or "0" for a missing price.
- offerPrice (the "NOW" price):
  - Remove ALL currency symbols, tags and text artifacts.
  - If it is not visibly present, return "".
  - NO ZEROES: never return "0.00" or "0" for a missing price.

### 3. Formatting
- Visible prices use exactly two decimal places (e.g. 10.00, 5.50).
- Return ONLY a JSON object of the form
  {"products": [{"description": "...", "arabicDescription": "...", "qty": null,
  "regularPrice": "...", "offerPrice": "..."}]}
  with no commentary and no code fences.
"""

_PRODUCT_FIELDS = ["description", "arabicDescription", "qty", "regularPrice", "offerPrice"]

RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "error": {"type": "STRING", "nullable": True},
        "products": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "description": {"type": "STRING"},
                    "arabicDescription": {"type": "STRING"},
                    "qty": {"type": "NUMBER", "nullable": True},
                    "regularPrice": {"type": "STRING"},
                    "offerPrice": {"type": "STRING"},
                },
                "required": _PRODUCT_FIELDS,
            },
        },
    },
}
