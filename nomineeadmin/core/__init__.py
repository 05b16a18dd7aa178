"""Core services: nomination draft editing, preview, persistence gateways."""
from nomineeadmin.core.editor import NominationEditor
from nomineeadmin.core.nomination_list import NominationList

__all__ = ["NominationEditor", "NominationList"]
