"""Custom exceptions for atlas generation"""


class AtlasError(Exception):
    """Base exception for atlas generation errors"""
    pass


class EmptyEntriesError(AtlasError):
    """Descriptor has no entries"""

    def __init__(self):
        super().__init__("Atlas descriptor has no entries")


class InvalidSizeError(AtlasError):
    """Page size is non-positive, or not a power of two where mips are generated"""

    def __init__(self, size: int, reason: str = "must be a positive integer"):
        self.size = size
        super().__init__(f"Invalid page size {size}: {reason}")


class InvalidPageCountError(AtlasError):
    """max_page_count is below 1"""

    def __init__(self, max_page_count: int):
        self.max_page_count = max_page_count
        super().__init__(f"max_page_count must be >= 1, got {max_page_count}")


class InvalidBlockSizeError(AtlasError):
    """Block size is not a power of two or exceeds the page size"""

    def __init__(self, block_size: int, size: int):
        self.block_size = block_size
        self.size = size
        super().__init__(
            f"Invalid block size {block_size}: must be a power of two no larger than page size {size}"
        )


class InvalidPaddingError(AtlasError):
    """Explicit padding is negative"""

    def __init__(self, padding: int):
        self.padding = padding
        super().__init__(f"Padding must be >= 0, got {padding}")


class UnsupportedModeError(AtlasError):
    """Page pixel mode is not supported"""

    def __init__(self, mode: str, supported):
        self.mode = mode
        super().__init__(f"Unsupported page mode {mode!r}. Supported: {', '.join(supported)}")


class DuplicateIdentityError(AtlasError):
    """Two entries share the same identity"""

    def __init__(self, identity):
        self.identity = identity
        super().__init__(f"Duplicate entry identity: {identity!r}")


class EntryTooLargeError(AtlasError):
    """A padded entry can never fit on a page"""

    def __init__(self, identity, padded_width: int, padded_height: int, size: int):
        self.identity = identity
        self.padded_width = padded_width
        self.padded_height = padded_height
        self.size = size
        super().__init__(
            f"Entry {identity!r} is {padded_width}x{padded_height} with padding, "
            f"larger than page size {size}x{size}"
        )


class PagesExhaustedError(AtlasError):
    """No placement found within max_page_count pages"""

    def __init__(self, max_page_count: int, entry_count: int):
        self.max_page_count = max_page_count
        self.entry_count = entry_count
        super().__init__(
            f"Could not pack {entry_count} entries into {max_page_count} page(s)"
        )
