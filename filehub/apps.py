from django.apps import AppConfig


class FilehubConfig(AppConfig):
    name = 'filehub'
