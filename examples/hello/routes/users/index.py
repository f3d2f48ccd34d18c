USERS = ["ada", "grace", "linus"]


async def handler(request, response, next):
    if request.relative_path != "/":
        return await next()
    return response.with_json({"users": USERS})
