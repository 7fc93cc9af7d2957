from rest_framework import serializers
from .models import Doctor, Institute


class InstituteSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Institute
        fields = ['id', 'name', 'slug']


class InstituteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Institute
        fields = ['id', 'name', 'slug', 'category', 'description', 'icon', 'services', 'image_url', 'display_order']


class DoctorSerializer(serializers.ModelSerializer):
    institutes = InstituteSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Doctor
        fields = ['id', 'name', 'slug', 'specialty', 'license', 'bio', 'photo_url', 'display_order', 'institutes']


class InstituteDetailSerializer(InstituteSerializer):
    doctors = serializers.SerializerMethodField()

    class Meta(InstituteSerializer.Meta):
        fields = InstituteSerializer.Meta.fields + ['doctors']

    def get_doctors(self, obj):
        return [
            {'id': d.id, 'name': d.name, 'slug': d.slug, 'specialty': d.specialty}
            for d in obj.doctors.all()
        ]
