"""
MongoDB document serialization utilities
"""
from typing import Dict, Any, List, Optional
from bson import ObjectId

# Fields that never leave the API
USER_PRIVATE_FIELDS = ("password", "answer")


def convert_object_ids(doc: Any) -> Any:
    """
    Recursively convert ObjectId instances to strings in a document

    Args:
        doc: Document that may contain ObjectIds at any level

    Returns:
        Document with all ObjectIds converted to strings
    """
    if isinstance(doc, dict):
        return {key: convert_object_ids(value) for key, value in doc.items()}
    elif isinstance(doc, list):
        return [convert_object_ids(item) for item in doc]
    elif isinstance(doc, ObjectId):
        return str(doc)
    else:
        return doc


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a MongoDB document into a JSON-safe dictionary

    Args:
        doc: MongoDB document dictionary

    Returns:
        Serialized copy of the document, or None if input is None
    """
    if doc is None:
        return None
    return convert_object_ids(dict(doc))


def serialize_docs(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Serialize a list of MongoDB documents"""
    return [serialize_doc(doc) for doc in docs if doc is not None]


def serialize_user(user: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Serialize a user document without its password hash or security answer"""
    if user is None:
        return None
    public = {key: value for key, value in user.items() if key not in USER_PRIVATE_FIELDS}
    return serialize_doc(public)


def serialize_product(product: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Serialize a product document, dropping the binary photo if it was loaded"""
    if product is None:
        return None
    public = {key: value for key, value in product.items() if key != "photo"}
    return serialize_doc(public)
