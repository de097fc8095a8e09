from dataclasses import dataclass
from enum import Enum

from packrender.domain.error_context import ErrorContext
from packrender.domain.json_types import JsonDict


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PACK_READ = "pack_read"
    SETUP = "setup"
    TEMPLATE = "template"
    NO_RENDERS = "no_renders"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    IO_FAILURE = "io_failure"


@dataclass
class PackRenderError(Exception):
    message: str
    details: JsonDict | None = None
    hint: str | None = None
    cause: BaseException | None = None
    context: ErrorContext | None = None

    kind = ErrorKind.SETUP

    def __str__(self) -> str:
        if self.cause is not None and str(self.cause):
            return f"{self.message}: {self.cause}"
        return self.message


class PackNotFound(PackRenderError):
    kind = ErrorKind.NOT_FOUND


class PackReadError(PackRenderError):
    kind = ErrorKind.PACK_READ


class InvalidArguments(PackRenderError):
    kind = ErrorKind.SETUP


class DestinationNotDirectory(PackRenderError):
    kind = ErrorKind.SETUP


class RendererTemplateError(PackRenderError):
    kind = ErrorKind.TEMPLATE


class NoTemplatesRendered(PackRenderError):
    kind = ErrorKind.NO_RENDERS


class OverwriteDeclined(PackRenderError):
    kind = ErrorKind.DECLINED


class OverwriteCancelled(PackRenderError):
    kind = ErrorKind.CANCELLED


class InputCancelled(PackRenderError):
    kind = ErrorKind.CANCELLED


class DestinationWriteError(PackRenderError):
    kind = ErrorKind.IO_FAILURE


class CopyError(PackRenderError):
    kind = ErrorKind.IO_FAILURE
