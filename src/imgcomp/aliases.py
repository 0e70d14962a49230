from imgcomp.core.models import HashAlgorithm

ALGORITHM_ALIASES = {
    "average": HashAlgorithm.AVERAGE,
    "ahash": HashAlgorithm.AVERAGE,
    "difference": HashAlgorithm.DIFFERENCE,
    "dhash": HashAlgorithm.DIFFERENCE,
    "perceptual": HashAlgorithm.PERCEPTUAL,
    "phash": HashAlgorithm.PERCEPTUAL,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Hashing algorithm:\n"
    "  average    (ahash) : mean brightness of an 8x8 thumbnail\n"
    "  difference (dhash) : brightness gradient of a 9x8 thumbnail [DEFAULT]\n"
    "  perceptual (phash) : low frequencies of a 32x32 cosine transform\n"
    "Example:\n"
    "  %(prog)s --algorithm phash *.jpg"
)

TOLERANCE_HELP_TEXT = (
    "Control how similar images must be to be considered 'similar'.\n"
    "NUM is an integer from 0 (identical) to 64 (very different).\n"
    "Pairs are reported when their distance is below NUM. Default: 5"
)

EPILOG_TEXT = """
Examples:
  Compare all JPEG files in the current directory
  %(prog)s *.jpg

  Use the perceptual hash and a stricter tolerance
  %(prog)s -p -t 3 ~/Pictures/*

  Print every fingerprint as it is computed
  %(prog)s --show-hashes photo1.png photo2.png

Fingerprints are cached in $XDG_CACHE_HOME/imgcomp.sqlite (or ~/.cache/imgcomp.sqlite).
"""
