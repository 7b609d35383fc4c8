"""HTTP surface of the Guildhall service."""
