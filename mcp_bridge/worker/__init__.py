from .framing import FrameReassembler
from .supervisor import ProcessSupervisor

__all__ = ["FrameReassembler", "ProcessSupervisor"]
