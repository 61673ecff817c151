"""Keep version literals in text files pinned to the latest remote release."""
