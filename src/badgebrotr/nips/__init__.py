"""NIP implementations used by badgebrotr.

Attributes:
    nip58: Badges -- definitions (kind 30009), awards (kind 8), and
        profile badges lists (kind 30008).
"""
