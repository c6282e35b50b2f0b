from .generator import (ExtraGenerator, ExtraKind, ExtraOptions, ExtraResult,
                        generate_extra)

__all__ = ["ExtraGenerator", "ExtraKind", "ExtraOptions", "ExtraResult", "generate_extra"]
