"""
cert_normalizer — certificate bundle normalizer.

Extracts certificates from arbitrary text (PEM blocks, bare base64, broken
PEM fragments), re-encodes them as canonical PEM, picks a best-effort leaf
and writes a leaf + chain bundle ready for upload.

Built on the Railway-Oriented Programming (ROP) primitives in
cert_normalizer.railway for explicit, composable error handling.
"""

__version__ = "0.1.0"
