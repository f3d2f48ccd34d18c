def handler(request, response, next):
    if request.relative_path != "/":
        return next()
    return "Hello, World!"
