# Entity Embedding Pipeline
# Nodes run in order: parse request -> fetch entity -> prepare text -> generate embedding -> store embedding

from .parse_request_node import parse_request_node
from .fetch_entity_node import fetch_entity_node
from .prepare_text_node import prepare_text_node
from .generate_embedding_node import generate_embedding_node
from .store_embedding_node import store_embedding_node

__all__ = [
    "parse_request_node",
    "fetch_entity_node",
    "prepare_text_node",
    "generate_embedding_node",
    "store_embedding_node"
]
