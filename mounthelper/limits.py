# mounthelper/limits.py - SINGLE SOURCE OF TRUTH for timeouts and thresholds
"""
All numeric limits and timeouts MUST be defined here.
No other module may define these values.
"""


class Limits:
    """Operational limits and thresholds."""

    # ==========================================================================
    # Timeouts (seconds)
    # ==========================================================================

    # VeraCrypt mount waits on the UAC prompt and the header key derivation,
    # both of which can take a while on slow machines.
    VERACRYPT_MOUNT_TIMEOUT = 600
    VERACRYPT_UNMOUNT_TIMEOUT = 60

    # ==========================================================================
    # Mount targets
    # ==========================================================================

    # Unix mount slots, same range VeraCrypt uses for /media/veracryptN
    UNIX_MAX_MOUNT_SLOT = 64

    # ==========================================================================
    # Logging
    # ==========================================================================

    LOG_MAX_BYTES = 1024 * 1024
    LOG_BACKUP_COUNT = 3
