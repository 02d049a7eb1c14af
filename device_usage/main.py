from device_usage.factory import create_app

app = create_app()
