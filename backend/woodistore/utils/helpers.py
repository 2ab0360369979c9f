from typing import Optional


def format_document(document: Optional[dict]) -> Optional[dict]:
    """Format MongoDB document for API response."""
    if document and "_id" in document:
        document["id"] = str(document["_id"])
        del document["_id"]
    return document
