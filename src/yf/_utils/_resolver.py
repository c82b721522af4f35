import inspect

from .._config import Options, coerce_options, merge_options


async def resolve_options(url: str, options: Options) -> Options:
    """Apply the ``get_options`` hook on top of the merged options.

    The hook receives the fully built URL and the options merged so far and
    may return a mapping, an ``Options`` or ``None``, directly or as an
    awaitable. Whatever it returns is merged over ``options`` once the await
    completes, so values read inside the hook (a fresh token, say) reflect
    the state at resolution time rather than at call time.

    Exceptions raised by the hook are not caught.
    """
    if options.get_options is None:
        return options

    patch = options.get_options(url, options)
    if inspect.isawaitable(patch):
        patch = await patch

    if not patch:
        return options
    return merge_options(options, coerce_options(patch))
