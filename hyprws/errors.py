class HyprwsError(Exception):
    pass


class InvalidWorkspaceIdError(HyprwsError):
    pass


class UnrecognizedArgumentError(HyprwsError):
    pass


class ConfigError(HyprwsError):
    pass


class CompositorError(HyprwsError):
    pass


class CompositorConnectionError(CompositorError):
    pass


class CompositorQueryError(CompositorError):
    pass


class CompositorDispatchError(CompositorError):
    pass
