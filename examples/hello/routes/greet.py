"""``/greet`` greets the world; ``/greet/<name>`` greets someone."""


def handler(request, response, next):
    name = request.relative_path.strip("/") or "World"
    if "/" in name:
        return next()
    return response.with_body(f"Hello, {name}!")
