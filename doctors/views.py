from rest_framework import generics, permissions
from django_filters.rest_framework import DjangoFilterBackend

from .filters import DoctorFilter
from .models import Doctor, Institute
from .serializers import DoctorSerializer, InstituteDetailSerializer, InstituteSerializer


class DoctorListView(generics.ListAPIView):
    serializer_class = DoctorSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = DoctorFilter

    def get_queryset(self):
        return Doctor.objects.prefetch_related('institutes').distinct()


class DoctorDetailView(generics.RetrieveAPIView):
    queryset = Doctor.objects.prefetch_related('institutes')
    serializer_class = DoctorSerializer
    permission_classes = [permissions.AllowAny]
    lookup_field = 'slug'


class InstituteListView(generics.ListAPIView):
    queryset = Institute.objects.all()
    serializer_class = InstituteSerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None


class InstituteDetailView(generics.RetrieveAPIView):
    queryset = Institute.objects.prefetch_related('doctors')
    serializer_class = InstituteDetailSerializer
    permission_classes = [permissions.AllowAny]
    lookup_field = 'slug'
