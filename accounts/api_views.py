from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response

from filehub.errors import NotFoundError, ServiceError
from filehub.exception_handler import error_response
from .services import AccountService


class UserRegistrationView(APIView):
    def post(self, request):
        service = AccountService()
        try:
            user = service.register(
                name=request.data.get('name'),
                email=request.data.get('email'),
                password=request.data.get('password'),
            )
        except ServiceError as e:
            return error_response(e)
        return Response({"message": "User created successfully", "user": user}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    def post(self, request):
        service = AccountService()
        try:
            user = service.login(
                name=request.data.get('name'),
                password=request.data.get('password'),
            )
        except NotFoundError as e:
            # An unknown user is a bad request on this route, not a missing resource.
            return Response(e.to_dict(), status=status.HTTP_400_BAD_REQUEST)
        except ServiceError as e:
            return error_response(e)
        return Response({"message": "Login successful", "user": user}, status=status.HTTP_200_OK)
