from packrender.adapters.errors import DestinationWriteError, RendererTemplateError
from packrender.application.reporting import report_error
from packrender.domain.diagnostics import FileLocation, Severity, ValueLocation
from packrender.domain.error_context import ErrorContext


def test_destination_file_becomes_file_location(terminal):
    error = DestinationWriteError(
        "failed to write file", context=ErrorContext().add("Destination File", "/out/x")
    )
    diagnostic = report_error(
        terminal,
        error,
        "error rendering to file",
        ErrorContext().add("Pack Name", "hello"),
        severity=Severity.WARN,
    )
    assert diagnostic.location == FileLocation("/out/x")
    assert diagnostic.code == "RENDER_IO_FAILURE"
    assert diagnostic.details == {"Pack Name": "hello", "Destination File": "/out/x"}
    assert terminal.warnings[0][2] == [("Pack Name", "hello"), ("Destination File", "/out/x")]


def test_template_name_becomes_value_location(terminal):
    error = RendererTemplateError(
        "failed to render template",
        context=ErrorContext().add("Template Name", "hello/templates/a.tpl"),
    )
    diagnostic = report_error(terminal, error, "failed to render pack")
    assert diagnostic.location == ValueLocation("template", "hello/templates/a.tpl")
    assert terminal.errors[0][1] == "failed to render pack"


def test_no_location_without_file_or_template(terminal):
    diagnostic = report_error(terminal, ValueError("boom"), "failed")
    assert diagnostic.location is None
    assert diagnostic.code == "RENDER_UNEXPECTED"
