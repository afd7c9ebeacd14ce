"""Serializers for the catalog."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from django.db.models import Avg, Count  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import Category, Feature, Policy, Product, ProductImage


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "title", "description", "image"]


class FeatureSerializer(serializers.ModelSerializer):
    class Meta:
        model = Feature
        fields = ["id", "name", "icon"]


class PolicySerializer(serializers.ModelSerializer):
    class Meta:
        model = Policy
        fields = ["id", "title", "description"]


class ProductSerializer(serializers.ModelSerializer):
    category = CategorySerializer(read_only=True)
    features = FeatureSerializer(many=True, read_only=True)
    images = serializers.SerializerMethodField()
    policies = PolicySerializer(many=True, read_only=True)
    average_rating = serializers.SerializerMethodField()
    ratings_count = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "features",
            "images",
            "policies",
            "average_rating",
            "ratings_count",
            "created_at",
            "updated_at",
        ]

    def get_images(self, obj: Product) -> list[str]:
        return [image.path for image in obj.images.all()]

    def _rating(self, obj: Product) -> dict:
        # Listing querysets annotate these; single objects fall back to a query.
        if hasattr(obj, "average_rating") and hasattr(obj, "ratings_count"):
            return {"average": obj.average_rating, "count": obj.ratings_count}
        stats = obj.ratings.aggregate(average=Avg("stars"), count=Count("id"))
        return stats

    def get_average_rating(self, obj: Product) -> float | None:
        average = self._rating(obj)["average"]
        return round(float(average), 2) if average is not None else None

    def get_ratings_count(self, obj: Product) -> int:
        return self._rating(obj)["count"] or 0


class ProductWriteSerializer(serializers.ModelSerializer):
    """Admin create/update. ``images`` and ``policies`` replace the previous ones."""

    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        allow_null=True,
        required=False,
    )
    feature_ids = serializers.PrimaryKeyRelatedField(
        source="features",
        queryset=Feature.objects.all(),
        many=True,
        required=False,
    )
    images = serializers.ListField(child=serializers.CharField(max_length=500), required=False)
    policies = PolicySerializer(many=True, required=False)

    class Meta:
        model = Product
        fields = ["id", "name", "description", "category", "feature_ids", "images", "policies"]

    def _replace_children(self, product: Product, images, policies) -> None:
        if images is not None:
            product.images.all().delete()
            ProductImage.objects.bulk_create(
                [ProductImage(product=product, path=path, order=index) for index, path in enumerate(images)]
            )
        if policies is not None:
            product.policies.all().delete()
            Policy.objects.bulk_create([Policy(product=product, **policy) for policy in policies])

    @transaction.atomic
    def create(self, validated_data):  # type: ignore
        images = validated_data.pop("images", None)
        policies = validated_data.pop("policies", None)
        product = super().create(validated_data)
        self._replace_children(product, images, policies)
        return product

    @transaction.atomic
    def update(self, instance, validated_data):  # type: ignore
        images = validated_data.pop("images", None)
        policies = validated_data.pop("policies", None)
        product = super().update(instance, validated_data)
        self._replace_children(product, images, policies)
        return product

    def to_representation(self, instance):  # type: ignore
        return ProductSerializer(instance, context=self.context).data
