from enum import Enum

HESSIAN_EXTENSIONS = (".hess",)
XYZ_EXTENSIONS = (".xyz",)
HESSIAN_CONTENT_MARKER = "$ir_spectrum"


class FileKind(Enum):
    GENERIC_OUTPUT = "output"
    HESSIAN_BLOCK = "hessian"
    XYZ = "xyz"


def classify(filename, content):
    """
    Decide which reader handles a file. Never fails: anything unrecognised is
    treated as regular ORCA output and simply yields no sections.
    """
    name = (filename or "").lower()
    if name.endswith(HESSIAN_EXTENSIONS) or HESSIAN_CONTENT_MARKER in (content or ""):
        return FileKind.HESSIAN_BLOCK
    if name.endswith(XYZ_EXTENSIONS):
        return FileKind.XYZ
    return FileKind.GENERIC_OUTPUT
