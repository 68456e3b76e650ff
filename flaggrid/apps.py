from django.apps import AppConfig


class FlagGridConfig(AppConfig):
    name = 'flaggrid'
    verbose_name = 'Flag Grid Reader'
