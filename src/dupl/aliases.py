from dupl.core.models import ReportFormat, HASH_ALGORITHM_CHOICES

ALGORITHM_CHOICES = list(HASH_ALGORITHM_CHOICES)

ALGORITHM_HELP_TEXT = (
    "Content digest used to compare files of equal size:\n"
    "  sha256     : SHA-256, collision resistant (default)\n"
    "  blake2b    : BLAKE2b, collision resistant\n"
    "  sha1       : SHA-1\n"
    "  md5        : MD5, fast\n"
    "  xxhash     : xxHash64, fastest, not cryptographic\n"
    "Example    : %(prog)s -a xxhash ~/Music\n"
)

FORMAT_ALIASES = {
    "text": ReportFormat.TEXT,
    "kv": ReportFormat.KEY_VALUE,
}

FORMAT_CHOICES = list(FORMAT_ALIASES.keys())

FORMAT_HELP_TEXT = (
    "Report format:\n"
    "  text       : human-readable summary (default)\n"
    "  kv         : one key=value per line, for scripts\n"
)

EPILOG_TEXT = """
Examples:
  Search the current directory for all file types
  %(prog)s

  Search in specific directories
  %(prog)s ~/Pictures ~/Docs

  Search the current directory for *.jpg and *.png files
  %(prog)s -f jpg png

  Search for *.mp3 files on a volume and store the duplicates list
  %(prog)s /Volumes/Music -s -f mp3

  Store the list in another directory and show every duplicate set
  %(prog)s -s -o ~/reports --list ~/Downloads

Notes:
  - Put directories before -f: everything after -f is read as an extension.
  - Files are grouped by size first; only files sharing a size are hashed.
  - The stored list (duplicates_YYYYMMDD_HHMMSS.txt) holds every duplicate
    except one kept file per set: the one with the smallest path.
  - Nothing is ever modified or deleted.
"""
