"""
Department views.

Departments only exist as values on staff rows, so ``POST`` echoes the
new department back; it appears in the list once a staff member is
assigned to it.
"""
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message
from core.serializers.staff import DepartmentCreateSerializer
from core.services.departments import department_entry, list_departments


@api_view(['GET', 'POST'])
def departments(request):
    if request.method == 'POST':
        return create_department(request)
    return get_departments(request)


@failure_message('Failed to fetch departments')
def get_departments(request):
    return Response(list_departments())


@failure_message('Failed to create department')
def create_department(request):
    s = DepartmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    return Response(department_entry(v['name'], 0, v['description']))
