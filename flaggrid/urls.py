from django.urls import path, re_path
from . import views

app_name = 'flaggrid'

urlpatterns = [
    path('api/extractGrid', views.extract_grid_view, name='extract_grid'),
    re_path(r'^(?!api/).*$', views.index_view, name='index'),
]
