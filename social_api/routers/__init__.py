# One APIRouter per resource; each module exposes ``router``.
