def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import logtemplate.core.interfaces as I

    assert hasattr(I, "LoggerFactoryProtocol")
    assert hasattr(I, "LoggerLikeProtocol")
    assert hasattr(I, "MessageTemplateProtocol")
    assert hasattr(I, "TemplateCompilerProtocol")


def test_default_implementations_satisfy_protocols():
    import logging

    from logtemplate import compile_template
    from logtemplate.core.interfaces import (
        LoggerFactoryProtocol,
        LoggerLikeProtocol,
        MessageTemplateProtocol,
        TemplateCompilerProtocol,
    )
    from logtemplate.logging.factory import DefaultLoggerFactory

    assert isinstance(compile_template("{A}"), MessageTemplateProtocol)
    assert isinstance(compile_template, TemplateCompilerProtocol)
    assert isinstance(DefaultLoggerFactory(), LoggerFactoryProtocol)
    assert isinstance(logging.getLogger("logtemplate"), LoggerLikeProtocol)


def test_template_logger_is_logger_like():
    from logtemplate import template_logger
    from logtemplate.core.interfaces import LoggerLikeProtocol

    assert isinstance(template_logger("tests.protocols"), LoggerLikeProtocol)
