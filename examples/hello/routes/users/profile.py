async def handler(request, response, next):
    if request.relative_path != "/":
        return await next()
    return response.with_body("Profile").with_status(200).with_header("X-Route", "profile")
