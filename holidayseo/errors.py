class TemplateReadError(OSError):
    """The base SPA template could not be read. Always fatal for the request."""


class UpstreamError(RuntimeError):
    """A backing data source or the tour API failed to answer."""
