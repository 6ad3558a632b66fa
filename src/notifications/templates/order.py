"""Order lifecycle templates: one for staff, five for the customer."""


class NewOrderTemplate:
    name = "NEW_ORDER"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        total = float(context.get("total") or 0)
        customer_name = context.get("customer_name", "a customer")
        return {
            "title": "New order",
            "body": f"New order #{order_number} worth {total:.2f} SAR from {customer_name}",
        }


class OrderShippedTemplate:
    name = "ORDER_SHIPPED"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        driver_name = context.get("driver_name")
        body = f"Your order {order_number} is on its way!"
        if driver_name:
            body += f" {driver_name} will deliver it."
        return {"title": "Your order has shipped", "body": body}


class TripStartedTemplate:
    name = "TRIP_STARTED"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        driver_name = context.get("driver_name") or "Your driver"
        return {
            "title": "Your driver is heading to you",
            "body": f"{driver_name} has started the trip for order {order_number}. Arriving soon!",
        }


class DriverAssignedTemplate:
    name = "DRIVER_ASSIGNED"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        driver_name = context.get("driver_name") or "A driver"
        return {
            "title": "A driver has been assigned",
            "body": f"{driver_name} will deliver your order {order_number}. Delivery starts soon.",
        }


class OrderDeliveredTemplate:
    name = "ORDER_DELIVERED"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "title": "Your order was delivered",
            "body": f"Order {order_number} was delivered. Thank you for shopping with us!",
        }


class OrderCancelledTemplate:
    name = "ORDER_CANCELLED"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        reason = context.get("reason")
        body = f"Your order {order_number} was cancelled"
        if reason:
            body += f" - {reason}"
        return {"title": "Your order was cancelled", "body": body + "."}
