from django.apps import AppConfig

class TactiCubePlayConfig(AppConfig):
    name = 'tacticube_play'
    label = 'tacticube_play'
    verbose_name = 'TactiCube Game Engine'
