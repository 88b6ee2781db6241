from .msg_parser import MsgFileReader

__all__ = ["MsgFileReader"]
