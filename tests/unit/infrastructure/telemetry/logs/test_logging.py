import pytest, logging, io, json
import payback.infrastructure.telemetry.logs as logs
from payback.common.config import Config
import tests.mocks as m

def test_logger_configuring(monkeypatch):
    monkeypatch.setattr(Config, 'JSON_LOGS', 1)
    logger = logs.configure_logger('payback-test')
    assert isinstance(logger.handlers[0].formatter, logs.OTLPJsonFormatter)
    monkeypatch.setattr(Config, 'JSON_LOGS', 0)
    logger = logs.configure_logger('payback-test')
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0].formatter, logs.OTLPJsonFormatter)



def test_otlp_span_context(monkeypatch):
    monkeypatch.setattr(Config, 'JSON_LOGS', 1)
    log_stream = io.StringIO()

    logger = logs.configure_logger('payback-test-json', log_stream)
    logger.handlers[0].formatter._trace_provider = m.DummyTraceProvider()
    logger.info("123")

    value: dict = json.loads(log_stream.getvalue())

    assert value['message'] == '123'
    assert value['service'] == Config.APP_NAME
    assert value['level'] == 'INFO'
    assert value.get('trace_id') == f"{'0'*31}f"
    assert value.get('span_id') == f"{'0'*15}f"


def test_no_trace_ids_outside_span(monkeypatch):
    monkeypatch.setattr(Config, 'JSON_LOGS', 1)
    log_stream = io.StringIO()

    logger = logs.configure_logger('payback-test-nospan', log_stream)
    logger.handlers[0].formatter._trace_provider = m.DummyTraceProvider(is_valid=False)
    logger.info("no span")

    value: dict = json.loads(log_stream.getvalue())
    assert 'trace_id' not in value
    assert 'span_id' not in value


def test_init_loggers():
    logs.init_loggers()
    for name in ('app', 'app.storage'):
        logger = logging.getLogger(name)
        assert logger.propagate is False
        assert len(logger.handlers) == 1
