from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from blogapi.domain.posts import PostStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FeaturedImage(CamelModel):
    url: Optional[str] = None
    alt: Optional[str] = None
    caption: Optional[str] = None


class PostWriteBase(CamelModel):
    # Longitudes validadas en blogapi.domain.posts para devolver mensajes propios
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    status: Optional[PostStatus] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[List[str]] = None
    featured_image: Optional[FeaturedImage] = None


class PostCreateIn(PostWriteBase):
    slug: Optional[str] = None


class PostUpdateIn(PostWriteBase):
    new_slug: Optional[str] = None
