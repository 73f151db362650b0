"""Order routes.

- ``POST   orders/``             public submission
- ``GET    orders/``             admin list (``?status=``)
- ``GET    orders/<order_id>/``  admin detail
- ``PATCH  orders/<order_id>/``  admin status change
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.orders.views import OrderViewSet

router = SimpleRouter()
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
