import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Institute',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150)),
                ('slug', models.SlugField(max_length=150, unique=True)),
                ('category', models.CharField(blank=True, max_length=100)),
                ('description', models.TextField(blank=True)),
                ('icon', models.CharField(blank=True, max_length=50)),
                ('services', models.JSONField(blank=True, default=list)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('display_order', models.IntegerField(default=0)),
            ],
            options={
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Doctor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150)),
                ('slug', models.SlugField(max_length=150, unique=True)),
                ('specialty', models.CharField(max_length=150)),
                ('license', models.CharField(blank=True, help_text='CRM, e.g. "CRM/SP 123456"', max_length=50)),
                ('bio', models.TextField(blank=True)),
                ('photo_url', models.URLField(blank=True, max_length=500)),
                ('display_order', models.IntegerField(default=0)),
            ],
            options={
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='DoctorInstitute',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='institute_links', to='doctors.doctor')),
                ('institute', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='doctor_links', to='doctors.institute')),
            ],
            options={
                'unique_together': {('doctor', 'institute')},
            },
        ),
        migrations.AddField(
            model_name='doctor',
            name='institutes',
            field=models.ManyToManyField(blank=True, related_name='doctors', through='doctors.DoctorInstitute', to='doctors.institute'),
        ),
    ]
