"""Shared route helpers: the storage dependency and engine error mapping."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException, Request

from wayfarer.errors import (
    NotFoundError,
    PreconditionError,
    ResolutionError,
    ScriptExecutionError,
)
from wayfarer.storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


@contextmanager
def engine_errors() -> Iterator[None]:
    """Translate engine exceptions into HTTP errors."""
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except PreconditionError as e:
        raise HTTPException(400, str(e))
    except (ScriptExecutionError, ResolutionError) as e:
        raise HTTPException(422, str(e))
