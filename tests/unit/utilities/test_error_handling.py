import pytest
from unittest.mock import patch

from vexgen_cli.utilities.error_handling import (
    format_and_print_error,
    handler_error_wrapper
)
from vexgen_cli.exceptions import (
    VexGenError,
    ConfigurationError,
    FileSystemError,
    MergeError,
    ProductURLParseError,
    SBOMParseError,
    SerializationError,
    ValidationError,
)


def _printed(mock_print):
    return [call.args[0] for call in mock_print.call_args_list if call.args]


# --- Tests for format_and_print_error ---
@patch('builtins.print')
def test_format_sbom_error(mock_print, mock_params):
    mock_params.command = "sbom"
    format_and_print_error(SBOMParseError("unmarshaling SBOM data: bad"), "handle_sbom", mock_params)

    printed = _printed(mock_print)
    assert any("Unable to read SBOM" in line for line in printed)
    assert any(mock_params.sbom in line for line in printed)


@patch('builtins.print')
def test_format_purl_error(mock_print, mock_params):
    format_and_print_error(ProductURLParseError("parsing purl: x: bad"), "handle_sbom", mock_params)

    assert any("Malformed package URL" in line for line in _printed(mock_print))


@patch('builtins.print')
def test_format_serialization_error(mock_print, mock_params):
    format_and_print_error(SerializationError("marshaling build configuration 'x'"), "handle_generate", mock_params)

    assert any("document ID" in line for line in _printed(mock_print))


@patch('builtins.print')
def test_format_merge_error(mock_print, mock_params):
    format_and_print_error(MergeError("merging vex documents: boom"), "handle_generate", mock_params)

    assert any("Merging the per-package documents failed" in line for line in _printed(mock_print))


@patch('builtins.print')
def test_format_file_system_error_lists_configs(mock_print, mock_params):
    mock_params.config = ["a.yaml", "b.yaml"]
    format_and_print_error(FileSystemError("missing"), "handle_generate", mock_params)

    assert any("a.yaml, b.yaml" in line for line in _printed(mock_print))


@patch('builtins.print')
def test_format_generic_error(mock_print, mock_params):
    mock_params.command = "generate"
    format_and_print_error(Exception("kaboom"), "handle_generate", mock_params)

    assert any("Error executing 'generate' command: kaboom" in line for line in _printed(mock_print))


@patch('builtins.print')
def test_details_shown_in_debug(mock_print, mock_params):
    mock_params.log = "DEBUG"
    format_and_print_error(ValidationError("bad", details={"package": "foo"}), "h", mock_params)

    assert any("package: foo" in line for line in _printed(mock_print))


# --- Tests for handler_error_wrapper ---
def test_wrapper_passes_through_result(vex_config, mock_params):
    @handler_error_wrapper
    def handler(cfg, params):
        return "ok"

    assert handler(vex_config, mock_params) == "ok"


@patch('vexgen_cli.utilities.error_handling.format_and_print_error')
def test_wrapper_reraises_expected_errors(mock_format, vex_config, mock_params):
    error = ConfigurationError("no distro")

    @handler_error_wrapper
    def handler(cfg, params):
        raise error

    with pytest.raises(ConfigurationError) as exc_info:
        handler(vex_config, mock_params)

    assert exc_info.value is error
    mock_format.assert_called_once_with(error, "handler", mock_params)


@patch('vexgen_cli.utilities.error_handling.format_and_print_error')
def test_wrapper_wraps_unexpected_errors(mock_format, vex_config, mock_params):
    mock_params.command = "generate"

    @handler_error_wrapper
    def handler(cfg, params):
        raise KeyError("package")

    with pytest.raises(VexGenError, match="Failed to execute generate") as exc_info:
        handler(vex_config, mock_params)

    assert exc_info.value.details["handler"] == "handler"
    assert isinstance(exc_info.value.__cause__, KeyError)
    mock_format.assert_called_once()
