from .render import OutputSinkProtocol, RendererProtocol
from .templating import TemplateEngineProtocol, TemplateLoaderProtocol

__all__ = [
    'OutputSinkProtocol',
    'RendererProtocol',
    'TemplateEngineProtocol',
    'TemplateLoaderProtocol',
]
