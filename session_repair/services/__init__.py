"""Service layer for transcript repair."""

from session_repair.services.breakpoints import find_break_points
from session_repair.services.chain import ChainLink, build_chain, find_last_compact_boundary
from session_repair.services.discovery import SessionDiscoveryService
from session_repair.services.insertion import InsertionResult, create_synthetic_record, insert_bookmarks
from session_repair.services.metadata import extract_metadata
from session_repair.services.parser import parse_transcript, serialize_transcript
from session_repair.services.repair import SessionRepairService, repair_session
from session_repair.services.validation import validate_records

__all__ = [
    'ChainLink',
    'InsertionResult',
    'SessionDiscoveryService',
    'SessionRepairService',
    'build_chain',
    'create_synthetic_record',
    'extract_metadata',
    'find_break_points',
    'find_last_compact_boundary',
    'insert_bookmarks',
    'parse_transcript',
    'repair_session',
    'serialize_transcript',
    'validate_records',
]
