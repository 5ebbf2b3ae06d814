from rest_framework.routers import DefaultRouter
from .views import ContactViewSet, ReviewViewSet

router = DefaultRouter()
router.register(r"contacts", ContactViewSet, basename="contact")
router.register(r"reviews", ReviewViewSet, basename="review")

urlpatterns = [
    *router.urls,
]
