import logfire

# Keep test runs local and quiet
logfire.configure(send_to_logfire=False, console=False)
