"""Per-session configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from fixkit.timerange import TimeRange


@dataclass
class SessionSettings:
    """All of the configuration for one session."""

    reset_on_logon: bool = False
    refresh_on_logon: bool = False
    reset_on_logout: bool = False
    reset_on_disconnect: bool = False
    heart_bt_int: timedelta = field(default_factory=timedelta)
    heart_bt_int_override: bool = False
    session_time: Optional[TimeRange] = None
    initiate_logon: bool = False
    resend_request_chunk_size: int = 0
    enable_last_msg_seq_num_processed: bool = False
    enable_next_expected_msg_seq_num: bool = False
    skip_check_latency: bool = False
    max_latency: timedelta = field(default_factory=timedelta)
    disable_message_persist: bool = False
    disable_check_original_timestamp: bool = False

    # Required on logon for FIXT.1.1 sessions.
    default_appl_ver_id: str = ""

    # Initiator only.
    reconnect_interval: timedelta = field(default_factory=timedelta)
    logout_timeout: timedelta = field(default_factory=timedelta)
    logon_timeout: timedelta = field(default_factory=timedelta)
    socket_connect_address: List[str] = field(default_factory=list)