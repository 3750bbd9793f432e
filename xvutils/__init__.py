"""Unix-style utilities, a shell command parser, a free-list allocator and RISC-V, virtio and ELF layout helpers."""

__version__ = "0.1.0"

__all__ = [
    "fmt",
    "ulib",
    "umalloc",
    "grep",
    "memory",
    "sh",
    "elf",
    "virtio",
    "fileutils",
    "tools",
    "ps",
]