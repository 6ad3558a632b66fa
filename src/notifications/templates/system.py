"""Onboarding templates sent to every new customer."""


class WelcomeTemplate:
    name = "WELCOME"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Welcome to the store!",
            "body": "Thanks for signing up. You can now browse products and place orders.",
        }


class AddAddressTemplate:
    name = "ADD_ADDRESS"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Add your first address",
            "body": "Add a delivery address to speed up checkout.",
        }


class ActivateAccountTemplate:
    name = "ACTIVATE_ACCOUNT"

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "title": "Activate your account",
            "body": "Verify your account with the code sent to your phone.",
        }
